"""
Report Operations
Run every demonstration and render them as one Markdown report
with a table of contents
"""

import re
import logging
import pandas as pd
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Tuple
from config.CONFIG_wrangling_demos import PROFILE_DIR, REPORT_FILE, RAW_DATA_DIR, USE_REMOTE
from wrangling.extract import load_all
from wrangling.validate import generate_profile, validate_dataset
from wrangling.demos import DEMOS

logger = logging.getLogger(__name__)

REPORT_TITLE = "Data Wrangling Demonstrations"
MAX_ROWS = 10


def slugify(text: str) -> str:
    """Markdown heading anchor"""
    slug = re.sub(r"[^a-z0-9 -]", "", text.lower()).strip()
    return re.sub(r"\s+", "-", slug)


def run_demos(datasets: Dict[str, pd.DataFrame],
              demos: List[Tuple[str, str, Callable]] = DEMOS) -> List[Dict]:
    """
    Execute every demonstration in order

    Args:
        datasets: Loaded datasets
        demos: (section, title, function) entries

    Returns:
        List of {"section", "title", "description", "result"}
    """
    results = []

    for section, title, demo in demos:
        logger.info(f"Running demo: {title}")
        try:
            result = demo(datasets)
        except Exception as e:
            logger.error(f"Demo '{title}' failed: {e}")
            raise

        results.append({
            "section": section,
            "title": title,
            "description": (demo.__doc__ or "").strip(),
            "result": result,
        })

    logger.info(f"✓ Ran {len(results)} demos")
    return results


def render_table(df: pd.DataFrame, max_rows: int = MAX_ROWS) -> List[str]:
    lines = ["```", df.head(max_rows).to_string(index=False), "```"]
    if len(df) > max_rows:
        lines.append(f"*Showing {max_rows} of {len(df):,} rows.*")
    else:
        lines.append(f"*{len(df):,} rows.*")
    return lines


def render_report(results: List[Dict], title: str = REPORT_TITLE, max_rows: int = MAX_ROWS) -> str:
    """
    Render demo results as Markdown

    Args:
        results: Output of run_demos
        title: Report title
        max_rows: Rows shown per table

    Returns:
        Markdown text: title, table of contents, one heading per section and demo
    """
    sections = {}
    for entry in results:
        sections.setdefault(entry["section"], []).append(entry)

    lines = [f"# {title}", "", "## Contents", ""]
    for section, entries in sections.items():
        lines.append(f"- [{section}](#{slugify(section)})")
        for entry in entries:
            lines.append(f"  - [{entry['title']}](#{slugify(entry['title'])})")
    lines.append("")

    for section, entries in sections.items():
        lines.extend([f"## {section}", ""])
        for entry in entries:
            lines.extend([f"### {entry['title']}", ""])
            if entry["description"]:
                lines.extend([entry["description"], ""])
            lines.extend(render_table(entry["result"], max_rows))
            lines.append("")

    return "\n".join(lines)


def build_report(output_file: str = REPORT_FILE, use_remote: bool = USE_REMOTE,
                 raw_dir: str = RAW_DATA_DIR, profile_dir: str = PROFILE_DIR) -> Dict:
    """
    Main report function: load, check, run and render
    This is called by the DAG

    Args:
        output_file: Markdown file to write
        use_remote: Fetch datasets from their configured URLs
        raw_dir: Directory for downloaded files
        profile_dir: Directory for one profile JSON per dataset

    Returns:
        Dictionary with status, report path and profile paths
    """
    logger.info("=" * 80)
    logger.info("BUILD REPORT")
    logger.info("=" * 80)

    datasets = load_all(use_remote=use_remote, raw_dir=raw_dir)
    checks = [validate_dataset(name, df) for name, df in datasets.items()]

    profile_files = []
    for name, df in datasets.items():
        profile_file = Path(profile_dir) / f"{name}.json"
        generate_profile(name, df, output_file=str(profile_file))
        profile_files.append(str(profile_file))

    results = run_demos(datasets)
    markdown = render_report(results)
    markdown += f"\n---\nGenerated {datetime.now():%Y-%m-%d %H:%M}\n"

    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(markdown, encoding="utf-8")
    logger.info(f"✓ Saved report: {output_path}")

    return {
        "status": "success",
        "report_file": str(output_path),
        "total_demos": len(results),
        "failed_checks": [c["dataset"] for c in checks if not c["passed"]],
        "profile_files": profile_files,
    }


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    build_report()
