"""
Join Operations
Mutating joins (left/right/inner/full), filtering joins (semi/anti)
and a row-count report that explains join blow-ups
"""

import pandas as pd
import logging
from typing import Dict, List, Tuple, Union

logger = logging.getLogger(__name__)

By = Union[str, List[str], Dict[str, str], None]

RELATIONSHIPS = ("one_to_one", "one_to_many", "many_to_one", "many_to_many")


def _resolve_by(x: pd.DataFrame, y: pd.DataFrame, by: By) -> Tuple[List[str], pd.DataFrame]:
    """
    Normalise by into x key names and a copy of y renamed to use them

    Returns:
        (key columns, y with its key columns renamed to the x names)
    """
    if by is None:
        keys = [c for c in x.columns if c in y.columns]
        if not keys:
            raise ValueError("No common columns to join on; pass by")
        logger.info(f"  Joining with by = {keys}")
        return keys, y

    if isinstance(by, str):
        by = [by]

    if isinstance(by, dict):
        keys = list(by.keys())
        y_keys = list(by.values())
    else:
        keys = list(by)
        y_keys = keys

    missing_x = [k for k in keys if k not in x.columns]
    missing_y = [k for k in y_keys if k not in y.columns]
    if missing_x:
        raise KeyError(f"Join columns not found in x: {missing_x}")
    if missing_y:
        raise KeyError(f"Join columns not found in y: {missing_y}")

    if y_keys != keys:
        y = y.rename(columns=dict(zip(y_keys, keys)))

    return keys, y


def _warn_many_to_many(x: pd.DataFrame, y: pd.DataFrame, keys: List[str]) -> None:
    x_dup = x.duplicated(subset=keys, keep=False)
    y_dup = y.duplicated(subset=keys, keep=False)
    if not (x_dup.any() and y_dup.any()):
        return

    shared = x.loc[x_dup, keys].merge(y.loc[y_dup, keys].drop_duplicates(), on=keys)
    if not shared.empty:
        logger.warning(
            f"  Detected a many-to-many relationship on {keys}: "
            f"{len(shared.drop_duplicates())} keys repeat on both sides"
        )


def _mutating_join(x: pd.DataFrame, y: pd.DataFrame, how: str, by: By,
                   suffixes: Tuple[str, str], relationship: str) -> pd.DataFrame:
    keys, y = _resolve_by(x, y, by)

    if relationship is None:
        _warn_many_to_many(x, y, keys)
        validate = None
    elif relationship in RELATIONSHIPS:
        validate = relationship
    else:
        raise ValueError(f"Unknown relationship: {relationship}")

    result = x.merge(y, how=how, on=keys, suffixes=suffixes, validate=validate)
    logger.info(f"  {how}_join: {len(x)} x rows, {len(y)} y rows -> {len(result)} rows")

    return result


def left_join(x: pd.DataFrame, y: pd.DataFrame, by: By = None,
              suffixes: Tuple[str, str] = ("_x", "_y"), relationship: str = None) -> pd.DataFrame:
    """
    Keep every row of x, add the columns of matching y rows

    A row of x matching several rows of y appears once per match.

    Args:
        x: Left table
        y: Right table
        by: Key column(s), or {x_name: y_name} (None = shared columns)
        suffixes: Added to non-key columns present in both tables
        relationship: Expected key relationship, enforced when given

    Returns:
        Joined DataFrame in x row order
    """
    return _mutating_join(x, y, "left", by, suffixes, relationship)


def right_join(x: pd.DataFrame, y: pd.DataFrame, by: By = None,
               suffixes: Tuple[str, str] = ("_x", "_y"), relationship: str = None) -> pd.DataFrame:
    """Keep every row of y, add the columns of matching x rows (y row order)"""
    return _mutating_join(x, y, "right", by, suffixes, relationship)


def inner_join(x: pd.DataFrame, y: pd.DataFrame, by: By = None,
               suffixes: Tuple[str, str] = ("_x", "_y"), relationship: str = None) -> pd.DataFrame:
    """Keep only the x rows with a match in y (x row order)"""
    return _mutating_join(x, y, "inner", by, suffixes, relationship)


def full_join(x: pd.DataFrame, y: pd.DataFrame, by: By = None,
              suffixes: Tuple[str, str] = ("_x", "_y"), relationship: str = None) -> pd.DataFrame:
    """
    Keep every row of both tables

    The result is the left join of x and y followed by the y rows that
    matched nothing in x, in y order.
    """
    keys, y_renamed = _resolve_by(x, y, by)
    left = _mutating_join(x, y_renamed, "left", keys, suffixes, relationship)
    unmatched = anti_join(y_renamed, x, keys)

    # non-key columns shared by both tables carry the y suffix in the join
    shared = [c for c in unmatched.columns if c in x.columns and c not in keys]
    unmatched = unmatched.rename(columns={c: f"{c}{suffixes[1]}" for c in shared})

    result = pd.concat([left, unmatched], ignore_index=True, sort=False)
    result = result[list(left.columns)]
    logger.info(f"  full_join: added {len(unmatched)} unmatched y rows -> {len(result)} rows")

    return result


def _match_mask(x: pd.DataFrame, y: pd.DataFrame, keys: List[str]) -> pd.Series:
    """Boolean Series over x: True where the key appears in y"""
    y_keys = y[keys].drop_duplicates()
    flagged = x[keys].merge(y_keys, on=keys, how="left", indicator=True)
    return pd.Series((flagged["_merge"] == "both").values, index=x.index)


def semi_join(x: pd.DataFrame, y: pd.DataFrame, by: By = None) -> pd.DataFrame:
    """
    Keep the rows of x that have a match in y

    Never duplicates x rows and never adds y columns.
    """
    keys, y = _resolve_by(x, y, by)
    result = x[_match_mask(x, y, keys)]
    logger.info(f"  semi_join: kept {len(result)} of {len(x)} rows")
    return result


def anti_join(x: pd.DataFrame, y: pd.DataFrame, by: By = None) -> pd.DataFrame:
    """Keep the rows of x that have no match in y"""
    keys, y = _resolve_by(x, y, by)
    result = x[~_match_mask(x, y, keys)]
    logger.info(f"  anti_join: kept {len(result)} of {len(x)} rows")
    return result


def join_report(x: pd.DataFrame, y: pd.DataFrame, by: By = None) -> Dict:
    """
    Row counts explaining what a left join of x and y does

    Args:
        x: Left table
        y: Right table
        by: Key column(s), as for left_join

    Returns:
        Dictionary with input, output, unmatched and duplicated-key counts
    """
    keys, y = _resolve_by(x, y, by)
    matches = x[keys].merge(y[keys], on=keys, how="left")

    report = {
        "by": keys,
        "x_rows": len(x),
        "y_rows": len(y),
        "left_join_rows": len(matches),
        "added_rows": len(matches) - len(x),
        "unmatched_x_rows": int((~_match_mask(x, y, keys)).sum()),
        "unmatched_y_rows": int((~_match_mask(y, x, keys)).sum()),
        "duplicated_y_keys": int(y.duplicated(subset=keys).sum()),
    }

    if report["added_rows"] > 0:
        logger.info(
            f"  Join on {keys} adds {report['added_rows']} rows: "
            f"{report['duplicated_y_keys']} y keys repeat"
        )

    return report
