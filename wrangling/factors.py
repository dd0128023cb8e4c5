"""
Factor Operations
Reorder, rename and lump the levels of categorical Series
"""

import pandas as pd
import numpy as np
import logging
from typing import Callable, Dict, List, Union

logger = logging.getLogger(__name__)


def as_factor(values, levels: List = None) -> pd.Series:
    """
    Categorical Series from values

    Existing categoricals keep their levels. Otherwise levels are the sorted
    unique non-missing values unless given.
    """
    s = values if isinstance(values, pd.Series) else pd.Series(values)

    if levels is None and isinstance(s.dtype, pd.CategoricalDtype):
        return s.copy()

    if levels is None:
        levels = sorted(s.dropna().unique())

    return pd.Series(pd.Categorical(s, categories=levels), index=s.index, name=s.name)


def levels(f: pd.Series) -> List:
    """Level order of a factor"""
    return list(as_factor(f).cat.categories)


def _with_levels(f: pd.Series, new_levels: List) -> pd.Series:
    return f.cat.reorder_categories(list(new_levels))


def fct_inorder(f) -> pd.Series:
    """Levels in order of first appearance"""
    f = as_factor(f)
    seen = list(pd.unique(f.dropna().astype(object)))
    unseen = [lvl for lvl in f.cat.categories if lvl not in seen]
    return _with_levels(f, seen + unseen)


def fct_infreq(f) -> pd.Series:
    """Levels by descending frequency; ties keep their current order"""
    f = as_factor(f)
    counts = f.value_counts(sort=False).reindex(f.cat.categories, fill_value=0)
    order = counts.sort_values(ascending=False, kind="stable").index
    return _with_levels(f, order)


def fct_rev(f) -> pd.Series:
    """Reverse the level order"""
    f = as_factor(f)
    return _with_levels(f, f.cat.categories[::-1])


def fct_relevel(f, *move: str, after: int = 0) -> pd.Series:
    """
    Move levels to the front, or to just after position `after`

    Levels not in f are logged and ignored.

    Args:
        f: Factor or values
        *move: Levels to move, in their new order
        after: Number of remaining levels placed before the moved ones

    Returns:
        Releveled factor
    """
    f = as_factor(f)
    current = list(f.cat.categories)

    unknown = [lvl for lvl in move if lvl not in current]
    if unknown:
        logger.warning(f"  fct_relevel: unknown levels ignored: {unknown}")

    moved = [lvl for lvl in move if lvl in current]
    rest = [lvl for lvl in current if lvl not in moved]

    if after < 0:
        after = len(rest) + after + 1
    after = max(0, min(after, len(rest)))

    return _with_levels(f, rest[:after] + moved + rest[after:])


def fct_reorder(f, x, fun: Union[str, Callable] = "median", desc: bool = False) -> pd.Series:
    """
    Order levels by a summary of another variable

    Args:
        f: Factor or values
        x: Values summarised per level (same length as f)
        fun: Summary function, median by default
        desc: Largest summary first

    Returns:
        Factor whose levels follow the summary; levels with no data go last
    """
    f = as_factor(f)
    x = np.asarray(x)
    if len(x) != len(f):
        raise ValueError("fct_reorder: f and x must have the same length")
    x = pd.Series(x, index=f.index)

    summary = x.groupby(f, observed=False).agg(fun).reindex(f.cat.categories)
    order = summary.sort_values(ascending=not desc, kind="stable", na_position="last").index
    return _with_levels(f, order)


def fct_recode(f, mapping: Dict[str, Union[str, List[str]]]) -> pd.Series:
    """
    Rename levels; several old levels may share a new name

    Args:
        f: Factor or values
        mapping: {new_level: old_level or [old_levels]}

    Returns:
        Recoded factor; new names take the position of their first old level
    """
    f = as_factor(f)
    current = list(f.cat.categories)

    rename = {}
    for new, olds in mapping.items():
        for old in [olds] if isinstance(olds, str) else olds:
            if old not in current:
                logger.warning(f"  fct_recode: unknown level ignored: {old}")
                continue
            rename[old] = new

    new_levels = list(dict.fromkeys(rename.get(lvl, lvl) for lvl in current))
    values = f.astype(object).map(lambda v: rename.get(v, v))
    return pd.Series(pd.Categorical(values, categories=new_levels), index=f.index, name=f.name)


def fct_collapse(f, groups: Dict[str, List[str]], other_level: str = None) -> pd.Series:
    """
    Collapse levels into named groups

    Args:
        f: Factor or values
        groups: {new_level: [old_levels]}
        other_level: Name for every level not listed (None = keep them)

    Returns:
        Collapsed factor
    """
    f = as_factor(f)
    mapping = {new: list(olds) for new, olds in groups.items()}

    if other_level is not None:
        listed = {old for olds in mapping.values() for old in olds}
        others = [lvl for lvl in f.cat.categories if lvl not in listed]
        if others:
            mapping.setdefault(other_level, []).extend(others)
            return fct_relevel(fct_recode(f, mapping), other_level, after=-1)

    return fct_recode(f, mapping)


def fct_lump_n(f, n: int, other_level: str = "Other") -> pd.Series:
    """
    Keep the n most frequent levels, lump the rest into other_level

    Levels tied with the n-th most frequent are kept. The other level goes last.
    """
    f = as_factor(f)
    counts = f.value_counts(sort=False).reindex(f.cat.categories, fill_value=0)

    if n >= len(counts):
        return f

    cutoff = counts.sort_values(ascending=False, kind="stable").iloc[max(n, 1) - 1]
    keep = [lvl for lvl, count in counts.items() if count >= cutoff] if n > 0 else []
    lumped = [lvl for lvl in f.cat.categories if lvl not in keep]
    if not lumped:
        return f

    values = f.astype(object).where(f.isin(keep) | f.isna(), other_level)
    return pd.Series(pd.Categorical(values, categories=keep + [other_level]),
                     index=f.index, name=f.name)


def fct_count(f, sort: bool = False) -> pd.DataFrame:
    """
    Count each level, zero counts included

    Args:
        f: Factor or values
        sort: Most frequent first

    Returns:
        DataFrame with columns f and n
    """
    f = as_factor(f)
    counts = f.value_counts(sort=False).reindex(f.cat.categories, fill_value=0)
    if sort:
        counts = counts.sort_values(ascending=False, kind="stable")

    return pd.DataFrame({
        "f": pd.Categorical(counts.index, categories=f.cat.categories),
        "n": counts.values.astype(int),
    })
