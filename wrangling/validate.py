"""
Data Validation Operations
Tidy-data checks run on every dataset before the demonstrations
"""

import pandas as pd
import logging
import json
from pathlib import Path
from typing import Dict, List
from config.DQC_wrangling_demos import DQ_CHECKS

logger = logging.getLogger(__name__)

# Most frequent values kept per text column
TOP_VALUES = 5


def _column_kind(col_data: pd.Series) -> str:
    if isinstance(col_data.dtype, pd.CategoricalDtype):
        return "factor"
    if pd.api.types.is_bool_dtype(col_data):
        return "logical"
    if pd.api.types.is_numeric_dtype(col_data):
        return "numeric"
    if pd.api.types.is_datetime64_any_dtype(col_data):
        return "date"
    return "text"


def generate_profile(name: str, df: pd.DataFrame, rules: Dict = None, output_file: str = None) -> Dict:
    """
    Describe a dataset before it is wrangled

    Records the observation key from the duplicate check, whether it holds,
    and per column the kind of values the demonstrations will meet.

    Args:
        name: Dataset name (key of rules)
        df: DataFrame to profile
        rules: Check configuration (defaults to DQ_CHECKS)
        output_file: Path to save profile JSON (optional)

    Returns:
        Profile dictionary
    """
    if rules is None:
        rules = DQ_CHECKS

    logger.info(f"Profiling {name}: {len(df)} records...")

    key_columns = rules.get(name, {}).get("duplicates", {}).get("key_columns")
    profile = {
        "dataset": name,
        "rows": len(df),
        "columns": len(df.columns),
        "key_columns": key_columns,
        "key_is_unique": None if key_columns is None else not df.duplicated(subset=key_columns).any(),
        "fields": {},
    }

    for column in df.columns:
        col_data = df[column]
        kind = _column_kind(col_data)
        field = {
            "kind": kind,
            "dtype": str(col_data.dtype),
            "missing": int(col_data.isna().sum()),
            "distinct": int(col_data.nunique()),
        }

        present = col_data.dropna()
        if kind == "numeric":
            field["min"] = None if present.empty else float(present.min())
            field["max"] = None if present.empty else float(present.max())
        elif kind == "date":
            field["first"] = None if present.empty else present.min().date().isoformat()
            field["last"] = None if present.empty else present.max().date().isoformat()
        elif kind == "factor":
            field["levels"] = [str(level) for level in col_data.cat.categories]
        elif kind == "text":
            counts = present.astype(str).value_counts().head(TOP_VALUES)
            field["top_values"] = {value: int(count) for value, count in counts.items()}

        profile["fields"][column] = field

    # Save if output_file provided
    if output_file:
        Path(output_file).parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w") as f:
            json.dump(profile, f, indent=2)
        logger.info(f"✓ Profile saved to {output_file}")

    return profile


def _require_columns(df: pd.DataFrame, columns: List[str]) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}")


def check_null(df: pd.DataFrame, column: str, allow_null: bool = False) -> pd.Series:
    """
    Check for null values

    Args:
        df: DataFrame to check
        column: Column name
        allow_null: Whether nulls are allowed

    Returns:
        Boolean Series (True = valid)
    """
    _require_columns(df, [column])

    if allow_null:
        return pd.Series(True, index=df.index)

    is_valid = df[column].notnull()
    invalid_count = (~is_valid).sum()
    logger.info(f"  Null check [{column}]: {invalid_count} nulls found")

    return is_valid


def check_categorical(df: pd.DataFrame, column: str, allowed_values: List[str]) -> pd.Series:
    """
    Check categorical values against allowed list

    Args:
        df: DataFrame to check
        column: Column name
        allowed_values: List of allowed values

    Returns:
        Boolean Series (True = valid)
    """
    _require_columns(df, [column])

    is_valid = df[column].isin(allowed_values) | df[column].isnull()
    invalid_count = (~is_valid).sum()
    logger.info(f"  Categorical check [{column}]: {invalid_count} invalid values")

    return is_valid


def check_string_format(df: pd.DataFrame, column: str, pattern: str) -> pd.Series:
    """
    Check values fully match a regex pattern (nulls pass)

    Args:
        df: DataFrame to check
        column: Column name
        pattern: Regular expression

    Returns:
        Boolean Series (True = valid)
    """
    _require_columns(df, [column])

    values = df[column].astype("string")
    is_valid = values.str.fullmatch(pattern).fillna(True).astype(bool)
    invalid_count = (~is_valid).sum()
    logger.info(f"  String format check [{column}]: {invalid_count} malformed values")

    return is_valid


def check_duplicates(df: pd.DataFrame, key_columns: List[str]) -> pd.Series:
    """
    Check one row per observation on a composite key

    Args:
        df: DataFrame to check
        key_columns: Columns forming the observation key

    Returns:
        Boolean Series (True = key is unique)
    """
    _require_columns(df, key_columns)

    duplicates_mask = df.duplicated(subset=key_columns, keep=False)
    num_duplicates = duplicates_mask.sum()

    if num_duplicates == 0:
        logger.info(f"  Duplicate check {key_columns}: No duplicates found")
    else:
        logger.info(f"  Duplicate check {key_columns}: {num_duplicates} rows share a key")

    return ~duplicates_mask


def validate_dataset(name: str, df: pd.DataFrame, rules: Dict = None) -> Dict:
    """
    Run every configured check for one dataset
    This is called by the DAG and by the report

    Args:
        name: Dataset name (key of rules)
        df: DataFrame to check
        rules: Check configuration (defaults to DQ_CHECKS)

    Returns:
        Dictionary with failure counts per check
    """
    if rules is None:
        rules = DQ_CHECKS

    logger.info(f"Running tidy checks on {name}...")

    is_valid = pd.Series(True, index=df.index)
    checks = {}

    for check_type, check_config in rules.get(name, {}).items():
        if check_type == "null":
            for column in check_config:
                result = check_null(df, column)
                checks[f"null__{column}"] = result
        elif check_type == "categorical":
            for column, params in check_config.items():
                result = check_categorical(df, column, **params)
                checks[f"categorical__{column}"] = result
        elif check_type == "string_format":
            for column, params in check_config.items():
                result = check_string_format(df, column, **params)
                checks[f"string_format__{column}"] = result
        elif check_type == "duplicates":
            result = check_duplicates(df, **check_config)
            checks["duplicates"] = result
        else:
            raise ValueError(f"Unknown check: {check_type}")

    for result in checks.values():
        is_valid &= result

    failed_rows = int((~is_valid).sum())
    summary = {
        "dataset": name,
        "checks": {check_id: int((~result).sum()) for check_id, result in checks.items()},
        "failed_rows": failed_rows,
        "passed": failed_rows == 0,
    }

    if summary["passed"]:
        logger.info(f"✓ {name}: all {len(checks)} checks passed")
    else:
        logger.warning(f"{name}: {failed_rows} of {len(df)} rows failed tidy checks")

    return summary
