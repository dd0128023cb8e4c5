"""
Reshaping Operations
pivot_longer / pivot_wider in the tidyr manner
"""

import re
import pandas as pd
import logging
from typing import Callable, Dict, List, Union

logger = logging.getLogger(__name__)

_ROW = "__row__"


def everything_except(df: pd.DataFrame, *columns: str) -> List[str]:
    """Column selector: all columns of df except the given ones"""
    return [c for c in df.columns if c not in columns]


def pivot_longer(df: pd.DataFrame, cols: List[str], names_to: Union[str, List[str]] = "name",
                 values_to: str = "value", names_prefix: str = None, names_sep: str = None,
                 names_transform: Union[Callable, Dict[str, Callable]] = None,
                 values_drop_na: bool = False) -> pd.DataFrame:
    """
    Lengthen data: turn the given columns into name/value pairs

    Rows come out row-major: every pivoted column of the first input row,
    then every pivoted column of the second row and so on.

    Args:
        df: DataFrame to lengthen
        cols: Columns to pivot into rows
        names_to: Name of the new names column, or several names with names_sep
        values_to: Name of the new values column
        names_prefix: Prefix stripped from the column names
        names_sep: Separator splitting column names into several names_to columns
        names_transform: Function applied to the names column(s), or a dict per column
        values_drop_na: Drop rows whose value is missing

    Returns:
        Long DataFrame
    """
    cols = list(cols)
    if not cols:
        raise ValueError("pivot_longer needs at least one column to pivot")
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}")

    if isinstance(names_to, str):
        names_to = [names_to]
    if len(names_to) > 1 and names_sep is None:
        raise ValueError("Several names_to columns need names_sep")

    id_cols = everything_except(df, *cols)
    work = df.reset_index(drop=True)
    work[_ROW] = range(len(work))

    # melt is column-major; a stable sort on the row number restores row-major
    long = work.melt(id_vars=id_cols + [_ROW], value_vars=cols,
                     var_name="__name__", value_name=values_to)
    long = long.sort_values(_ROW, kind="stable").drop(columns=_ROW)

    names = long.pop("__name__").astype(str)
    if names_prefix:
        names = names.str.replace(f"^{re.escape(names_prefix)}", "", regex=True)

    if names_sep is not None:
        parts = names.str.split(names_sep, n=len(names_to) - 1, regex=False, expand=True)
        if parts.shape[1] != len(names_to):
            raise ValueError(f"Column names do not split into {len(names_to)} pieces on {names_sep!r}")
        name_frame = pd.DataFrame({to: parts[i] for i, to in enumerate(names_to)})
    else:
        name_frame = pd.DataFrame({names_to[0]: names})

    if names_transform is not None:
        for column in names_to:
            fn = names_transform.get(column) if isinstance(names_transform, dict) else names_transform
            if fn is not None:
                name_frame[column] = name_frame[column].map(fn)

    insert_at = len(id_cols)
    for offset, column in enumerate(names_to):
        long.insert(insert_at + offset, column, name_frame[column].values)

    if values_drop_na:
        long = long[long[values_to].notna()]

    long = long.reset_index(drop=True)
    logger.info(f"  pivot_longer: {df.shape} -> {long.shape}")

    return long


def pivot_wider(df: pd.DataFrame, names_from: str, values_from: str, id_cols: List[str] = None,
                values_fill=None, values_fn: Union[str, Callable] = None, names_prefix: str = "",
                names_sort: bool = False) -> pd.DataFrame:
    """
    Widen data: spread one column's values into new columns

    Args:
        df: DataFrame to widen
        names_from: Column whose values become the new column names
        values_from: Column whose values fill the new columns
        id_cols: Columns identifying a row (None = every other column)
        values_fill: Value for cells with no observation
        values_fn: Aggregation applied when an id/name pair repeats
        names_prefix: Prefix added to the new column names
        names_sort: Sort the new columns instead of first-appearance order

    Returns:
        Wide DataFrame, one row per id combination in order of first appearance
    """
    for column in (names_from, values_from):
        if column not in df.columns:
            raise KeyError(f"Column not found: {column}")

    if id_cols is None:
        id_cols = everything_except(df, names_from, values_from)
    id_cols = list(id_cols)
    keys = id_cols + [names_from]

    duplicated = df.duplicated(subset=keys, keep=False)
    if duplicated.any() and values_fn is None:
        raise ValueError(
            f"{int(duplicated.sum())} rows share an id/{names_from} combination; "
            f"pass values_fn to summarise them"
        )

    if values_fn is not None:
        cells = df.groupby(keys, sort=False, dropna=False)[values_from].agg(values_fn)
    else:
        cells = df.set_index(keys)[values_from]

    names = pd.unique(df[names_from])
    if names_sort:
        names = sorted(names)

    if id_cols:
        wide = cells.unstack(names_from).reindex(columns=names)
        if values_fill is not None:
            # only cells with no input row get the fill; observed NA stays NA
            observed = (
                pd.Series(True, index=cells.index)
                .unstack(names_from, fill_value=False)
                .reindex(columns=names, fill_value=False)
            )
            wide = wide.where(observed, values_fill)
        wide.columns = [f"{names_prefix}{name}" for name in wide.columns]
        wide = wide.reset_index()
        # restore first-appearance row order
        order = df[id_cols].drop_duplicates()
        wide = order.merge(wide, on=id_cols, how="left")
    else:
        # every name has a cell, nothing to fill
        wide = cells.reindex(names).to_frame().T
        wide.columns = [f"{names_prefix}{name}" for name in names]
        wide = wide.reset_index(drop=True)

    new_columns = [f"{names_prefix}{name}" for name in names]
    if values_fill is not None and pd.api.types.is_integer_dtype(cells):
        if not wide[new_columns].isna().any().any():
            wide[new_columns] = wide[new_columns].astype(cells.dtype)

    logger.info(f"  pivot_wider: {df.shape} -> {wide.shape}")

    return wide
