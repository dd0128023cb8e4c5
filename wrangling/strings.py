"""
String Operations
stringr-style helpers over pandas' string dtype, and the tidyr
column splitters: separate, separate_rows, unite, extract
"""

import re
import pandas as pd
import logging
from functools import reduce
from typing import List, Union

logger = logging.getLogger(__name__)

# Any run of non-alphanumeric characters
DEFAULT_SEP = r"[^0-9A-Za-z]+"
# As above, but keeps decimal points together with their digits
DEFAULT_ROWS_SEP = r"[^0-9A-Za-z.]+"

TRIM_SIDES = {"both": "strip", "left": "lstrip", "right": "rstrip"}

# Global inline flags such as (?i), which must stay at the start of a pattern
INLINE_FLAGS = re.compile(r"^\(\?[aiLmsux]+\)")


def _as_string(s) -> pd.Series:
    if not isinstance(s, pd.Series):
        s = pd.Series(s)
    return s.astype("string")


# Case, length and whitespace

def str_length(s) -> pd.Series:
    return _as_string(s).str.len()


def str_to_lower(s) -> pd.Series:
    return _as_string(s).str.lower()


def str_to_upper(s) -> pd.Series:
    return _as_string(s).str.upper()


def str_to_title(s) -> pd.Series:
    return _as_string(s).str.title()


def str_trim(s, side: str = "both") -> pd.Series:
    """Remove whitespace from the start and/or end"""
    if side not in TRIM_SIDES:
        raise ValueError(f"Unknown side: {side}")
    values = _as_string(s).str
    return getattr(values, TRIM_SIDES[side])()


def str_squish(s) -> pd.Series:
    """Trim, then collapse inner whitespace runs to one space"""
    return _as_string(s).str.strip().str.replace(r"\s+", " ", regex=True)


def str_pad(s, width: int, side: str = "left", pad: str = " ") -> pd.Series:
    """Pad strings to at least width characters"""
    if side not in ("left", "right", "both"):
        raise ValueError(f"Unknown side: {side}")
    return _as_string(s).str.pad(width, side=side, fillchar=pad)


# Pattern matching

def str_detect(s, pattern: str, negate: bool = False) -> pd.Series:
    """True where the regex pattern matches anywhere in the string"""
    result = _as_string(s).str.contains(pattern, regex=True)
    return ~result if negate else result


def str_starts(s, pattern: str, negate: bool = False) -> pd.Series:
    result = _as_string(s).str.match(pattern)
    return ~result if negate else result


def str_ends(s, pattern: str, negate: bool = False) -> pd.Series:
    result = _as_string(s).str.contains(f"(?:{pattern})$", regex=True)
    return ~result if negate else result


def str_count(s, pattern: str) -> pd.Series:
    """Number of non-overlapping matches"""
    return _as_string(s).str.count(pattern)


def str_sub(s, start: int = 1, end: int = -1) -> pd.Series:
    """
    Substring by 1-based, inclusive positions

    Negative positions count from the end: -1 is the last character.
    str_sub(s, -3) gives the last three characters.
    """
    py_start = start - 1 if start > 0 else (start if start < 0 else 0)
    if end == -1:
        py_end = None
    elif end >= 0:
        py_end = end
    else:
        py_end = end + 1

    return _as_string(s).str.slice(py_start, py_end)


def str_replace(s, pattern: str, replacement: str) -> pd.Series:
    """Replace the first match"""
    return _as_string(s).str.replace(pattern, replacement, n=1, regex=True)


def str_replace_all(s, pattern: str, replacement: str) -> pd.Series:
    return _as_string(s).str.replace(pattern, replacement, regex=True)


def str_remove(s, pattern: str) -> pd.Series:
    return str_replace(s, pattern, "")


def str_remove_all(s, pattern: str) -> pd.Series:
    return str_replace_all(s, pattern, "")


def str_extract(s, pattern: str, group: int = 0) -> pd.Series:
    """
    First match of pattern, or of one of its capture groups

    Args:
        s: Strings
        pattern: Regular expression
        group: 0 for the whole match, k for the k-th capture group

    Returns:
        Matched text, <NA> where nothing matched
    """
    flags = INLINE_FLAGS.match(pattern)
    prefix = flags.group(0) if flags else ""
    body = pattern[len(prefix):]

    matches = _as_string(s).str.extract(f"{prefix}({body})", expand=True)
    if group >= matches.shape[1]:
        raise ValueError(f"Pattern has no group {group}: {pattern}")
    return matches[group].rename(getattr(s, "name", None))


def str_c(*parts, sep: str = "") -> pd.Series:
    """Element-wise concatenation; a missing part makes the result missing"""
    if not parts:
        raise ValueError("str_c needs at least one part")

    series = [p for p in parts if isinstance(p, pd.Series)]
    index = series[0].index if series else pd.RangeIndex(1)
    pieces = [_as_string(p) if isinstance(p, pd.Series) else pd.Series(str(p), index=index, dtype="string")
              for p in parts]

    return reduce(lambda left, right: left + sep + right, pieces)


def str_split(s, pattern: str, n: int = -1, simplify: bool = False) -> Union[pd.Series, pd.DataFrame]:
    """
    Split strings on a regex

    Args:
        s: Strings
        pattern: Regular expression to split on
        n: Maximum number of pieces (-1 = no limit)
        simplify: Return a DataFrame with one column per piece

    Returns:
        Series of lists, or a DataFrame when simplify
    """
    values = _as_string(s)

    # pandas reads n=0 as "no limit", so one piece means no split at all
    if n == 1:
        if simplify:
            return values.to_frame(name=0)
        return pd.Series([v if pd.isna(v) else [v] for v in values],
                         index=values.index, name=values.name, dtype=object)

    max_split = n - 1 if n > 0 else -1
    return values.str.split(pattern, n=max_split, regex=True, expand=simplify)


# Column splitting

def _convert(values: pd.Series) -> pd.Series:
    """Numeric where every value parses, unchanged otherwise"""
    try:
        return pd.to_numeric(values)
    except (ValueError, TypeError):
        return values


def _insert_columns(df: pd.DataFrame, col: str, new: pd.DataFrame, remove: bool) -> pd.DataFrame:
    """Place new columns where col is (or right after it when kept)"""
    out = df.copy()
    position = out.columns.get_loc(col)
    if remove:
        out = out.drop(columns=col)
    else:
        position += 1

    for offset, name in enumerate(new.columns):
        out.insert(position + offset, name, new[name].values)

    return out


def _fill_left(row: pd.Series) -> pd.Series:
    present = [v for v in row if not pd.isna(v)]
    return pd.Series([pd.NA] * (len(row) - len(present)) + present, index=row.index)


def separate(df: pd.DataFrame, col: str, into: List[str], sep: Union[str, int] = DEFAULT_SEP,
             remove: bool = True, convert: bool = False, extra: str = "warn",
             fill: str = "warn") -> pd.DataFrame:
    """
    Split one column into several

    Args:
        df: DataFrame
        col: Column to split
        into: New column names; None drops that piece
        sep: Regex separator, or an integer position to split at
        remove: Drop the original column
        convert: Convert pieces to numbers where possible
        extra: Too many pieces: 'warn' / 'drop' the rest, or 'merge' them into the last column
        fill: Too few pieces: 'warn' / 'right' pad with missing on the right, or 'left'

    Returns:
        New DataFrame, new columns at the original column's position
    """
    if col not in df.columns:
        raise KeyError(f"Column not found: {col}")
    if extra not in ("warn", "drop", "merge"):
        raise ValueError(f"Unknown extra: {extra}")
    if fill not in ("warn", "right", "left"):
        raise ValueError(f"Unknown fill: {fill}")

    values = _as_string(df[col])
    n = len(into)

    if isinstance(sep, int):
        if n != 2:
            raise ValueError("Splitting at a position gives exactly two pieces")
        pieces = pd.DataFrame({0: values.str.slice(0, sep), 1: values.str.slice(sep)})
    elif extra == "merge" and n == 1:
        pieces = values.to_frame(name=0)
    else:
        max_split = n - 1 if extra == "merge" else -1
        pieces = values.str.split(sep, n=max_split, regex=True, expand=True)

    if pieces.shape[1] > n:
        too_many = pieces.iloc[:, n:].notna().any(axis=1)
        if extra == "warn" and too_many.any():
            logger.warning(f"  separate [{col}]: additional pieces discarded in {int(too_many.sum())} rows")
        pieces = pieces.iloc[:, :n]
    pieces = pieces.reindex(columns=range(n))

    too_few = values.notna() & pieces.isna().any(axis=1)
    if too_few.any():
        if fill == "warn":
            logger.warning(f"  separate [{col}]: missing pieces filled with NA in {int(too_few.sum())} rows")
        elif fill == "left":
            pieces.loc[too_few] = pieces.loc[too_few].apply(_fill_left, axis=1)

    new = pd.DataFrame(index=df.index)
    for i, name in enumerate(into):
        if name is None:
            continue
        piece = pieces[i].astype("string")
        new[name] = _convert(piece) if convert else piece

    return _insert_columns(df, col, new, remove)


def separate_rows(df: pd.DataFrame, *cols: str, sep: str = DEFAULT_ROWS_SEP,
                  convert: bool = False) -> pd.DataFrame:
    """
    Split delimited values into one row each

    Several columns are split in parallel and must give the same number
    of pieces per row.
    """
    if not cols:
        raise ValueError("separate_rows needs at least one column")
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}")

    out = df.copy()
    for column in cols:
        out[column] = _as_string(out[column]).str.split(sep, regex=True)

    out = out.explode(list(cols), ignore_index=True)
    for column in cols:
        out[column] = out[column].astype("string")
        if convert:
            out[column] = _convert(out[column])

    logger.info(f"  separate_rows {list(cols)}: {len(df)} -> {len(out)} rows")

    return out


def unite(df: pd.DataFrame, col: str, cols: List[str], sep: str = "_", remove: bool = True,
          na_rm: bool = False) -> pd.DataFrame:
    """
    Paste several columns into one

    Missing values are written as "NA" unless na_rm, which skips them.
    The new column takes the position of the first united column.
    """
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {missing}")

    parts = df[cols].astype("string")
    if na_rm:
        united = parts.apply(lambda row: sep.join(v for v in row if not pd.isna(v)), axis=1)
    else:
        united = parts.fillna("NA").apply(sep.join, axis=1)

    out = df.copy()
    position = out.columns.get_loc(cols[0])
    if remove:
        position = len([c for c in df.columns[:position] if c not in cols])
        out = out.drop(columns=cols)

    out.insert(position, col, united.astype("string"))

    return out


def extract(df: pd.DataFrame, col: str, into: List[str], regex: str, remove: bool = True,
            convert: bool = False) -> pd.DataFrame:
    """
    Turn each capture group of regex into a new column

    Rows where the regex does not match get missing values.
    """
    if col not in df.columns:
        raise KeyError(f"Column not found: {col}")

    groups = _as_string(df[col]).str.extract(regex, expand=True)
    if groups.shape[1] != len(into):
        raise ValueError(f"regex has {groups.shape[1]} groups, into names {len(into)}")

    new = pd.DataFrame(index=df.index)
    for i, name in enumerate(into):
        piece = groups.iloc[:, i].astype("string")
        new[name] = _convert(piece) if convert else piece

    return _insert_columns(df, col, new, remove)
