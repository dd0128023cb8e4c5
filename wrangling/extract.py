"""
Data Extraction Operations
Fetch remote sources, fall back on the bundled samples
"""

import requests
import pandas as pd
import logging
from pathlib import Path
from typing import Dict, Iterable
from config.CONFIG_wrangling_demos import DATASETS, RAW_DATA_DIR, USE_REMOTE
from wrangling.samples import family_table

# Constants
REQUEST_TIMEOUT = 30  # seconds
SAMPLE_DATA_DIR = Path(__file__).parent / "sample_data"
READERS = {
    "csv": pd.read_csv,
    "xlsx": pd.read_excel,
}

logger = logging.getLogger(__name__)


def raw_file_path(name: str, fmt: str, raw_dir: str = RAW_DATA_DIR) -> Path:
    """Where the downloaded copy of a dataset lives"""
    return Path(raw_dir) / f"raw_{name}.{fmt}"


def fetch_and_save(name: str, url: str, fmt: str = "csv", output_dir: str = RAW_DATA_DIR) -> str:
    """
    Download one dataset and save the raw bytes

    Args:
        name: Dataset name, used in the file name
        url: Source URL
        fmt: File format / extension
        output_dir: Directory to save raw file

    Returns:
        Path to saved file
    """
    logger.info(f"Fetching {name}: {url}")

    try:
        response = requests.get(url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"Request failed: {e}")
        raise

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    file_path = raw_file_path(name, fmt, output_dir)
    file_path.write_bytes(response.content)

    logger.info(f"✓ Saved {len(response.content):,} bytes to {file_path}")
    return str(file_path)


def read_source(path, fmt: str, parse_dates: list = None, **read_kwargs) -> pd.DataFrame:
    """
    Read a csv or xlsx file into a DataFrame

    Args:
        path: File to read
        fmt: 'csv' or 'xlsx'
        parse_dates: Columns to convert with pd.to_datetime
        **read_kwargs: Passed through to the pandas reader

    Returns:
        DataFrame
    """
    if fmt not in READERS:
        raise ValueError(f"Unknown format: {fmt}")

    if fmt == "xlsx":
        read_kwargs.setdefault("engine", "openpyxl")

    df = READERS[fmt](path, **read_kwargs)

    for column in parse_dates or []:
        df[column] = pd.to_datetime(df[column])

    return df


def load_dataset(name: str, use_remote: bool = USE_REMOTE, raw_dir: str = RAW_DATA_DIR,
                 refresh: bool = False) -> pd.DataFrame:
    """
    Load one dataset by name

    Remote sources are used only when use_remote is set and a URL is
    configured, otherwise the bundled sample CSV is read. A raw file
    already in raw_dir is read instead of downloading again unless refresh.

    Args:
        name: Key of DATASETS
        use_remote: Fetch from the configured URL
        raw_dir: Directory for downloaded files
        refresh: Download even when a raw file exists

    Returns:
        DataFrame
    """
    if name not in DATASETS:
        raise KeyError(f"Unknown dataset: {name}")

    source = DATASETS[name]

    if source["format"] == "synthetic":
        df = family_table()
        logger.info(f"  Built {name}: {len(df):,} records")
        return df

    parse_dates = source.get("parse_dates")

    if use_remote and source.get("url"):
        file_path = raw_file_path(name, source["format"], raw_dir)
        if refresh or not file_path.exists():
            file_path = fetch_and_save(name, source["url"], source["format"], raw_dir)
        df = read_source(file_path, source["format"], parse_dates)
    else:
        file_path = SAMPLE_DATA_DIR / source["sample"]
        if not file_path.exists():
            raise FileNotFoundError(f"No sample file for {name}: {file_path}")
        df = read_source(file_path, "csv", parse_dates)

    logger.info(f"  Loaded {name} from {file_path}: {len(df):,} records")
    return df


def load_all(names: Iterable[str] = None, use_remote: bool = USE_REMOTE,
             raw_dir: str = RAW_DATA_DIR, refresh: bool = False) -> Dict[str, pd.DataFrame]:
    """
    Load several datasets

    Args:
        names: Dataset names (None = all configured datasets)
        use_remote: Fetch from the configured URLs
        raw_dir: Directory for downloaded files
        refresh: Download even when raw files exist

    Returns:
        Dictionary of name -> DataFrame
    """
    logger.info("Loading datasets...")

    if names is None:
        names = list(DATASETS)

    datasets = {name: load_dataset(name, use_remote, raw_dir, refresh) for name in names}
    logger.info(f"✓ Loaded {len(datasets)} datasets")

    return datasets
