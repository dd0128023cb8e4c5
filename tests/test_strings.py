"""
Tests for wrangling/strings.py
"""
import logging

import pandas as pd
import pytest

from wrangling.strings import (
    str_length, str_to_lower, str_to_upper, str_to_title, str_trim, str_squish, str_pad,
    str_detect, str_starts, str_ends, str_count, str_sub, str_replace, str_replace_all,
    str_remove_all, str_extract, str_c, str_split,
    separate, separate_rows, unite, extract,
)


@pytest.fixture
def varieties():
    return pd.Series(["Bush Bush Slender", "grape", None], name="variety")


def test_case_and_length(varieties):
    assert list(str_length(varieties)[:2]) == [17, 5]
    assert list(str_to_upper(varieties)[:2]) == ["BUSH BUSH SLENDER", "GRAPE"]
    assert list(str_to_lower(varieties)[:2]) == ["bush bush slender", "grape"]
    assert str_to_title(["super sugar snap"])[0] == "Super Sugar Snap"


def test_missing_values_propagate(varieties):
    assert str_length(varieties).isna().tolist() == [False, False, True]
    assert str_detect(varieties, "Bush").isna().tolist() == [False, False, True]


def test_whitespace():
    s = ["  Big   Beef "]
    assert str_trim(s)[0] == "Big   Beef"
    assert str_trim(s, side="left")[0] == "Big   Beef "
    assert str_trim(s, side="right")[0] == "  Big   Beef"
    assert str_squish(s)[0] == "Big Beef"
    with pytest.raises(ValueError):
        str_trim(s, side="middle")


def test_str_pad():
    assert list(str_pad(["7", "42"], 3, pad="0")) == ["007", "042"]
    assert str_pad(["ab"], 4, side="right", pad="-")[0] == "ab--"


def test_detect_starts_ends_count(varieties):
    s = varieties[:2]
    assert list(str_detect(s, r"\s")) == [True, False]
    assert list(str_detect(s, r"\s", negate=True)) == [False, True]
    assert list(str_starts(s, "Bu")) == [True, False]
    assert list(str_ends(s, "pe|er")) == [True, True]
    assert list(str_count(s, "Bush")) == [2, 0]


def test_str_sub_positions():
    s = ["Bush Bush Slender"]
    assert str_sub(s, 1, 4)[0] == "Bush"
    assert str_sub(s, -7)[0] == "Slender"
    assert str_sub(s, 6, -9)[0] == "Bush"
    assert str_sub(s, 11)[0] == "Slender"


def test_replace_and_remove():
    s = ["Farmer's Market Blend"]
    assert str_replace(s, r"[aeiou]", "_")[0] == "F_rmer's Market Blend"
    assert str_replace_all(s, r"\s+", "-")[0] == "Farmer's-Market-Blend"
    assert str_remove_all(s, r"[^A-Za-z]")[0] == "FarmersMarketBlend"


def test_str_extract():
    s = pd.Series(["dog:Biscuit", "fish"])
    assert str_extract(s, r"\w+:")[0] == "dog:"
    assert str_extract(s, r"(\w+):(\w+)", group=2)[0] == "Biscuit"
    assert pd.isna(str_extract(s, r"\w+:")[1])
    with pytest.raises(ValueError):
        str_extract(s, r"\w+", group=1)


def test_str_extract_inline_flags():
    s = pd.Series(["Bush Blue Lake", "snap"])
    assert str_extract(s, "(?i)bush")[0] == "Bush"
    assert pd.isna(str_extract(s, "(?i)bush")[1])
    assert str_extract(s, r"(?i)(bush) (blue)", group=2)[0] == "Blue"


def test_str_c():
    first = pd.Series(["Maya", "Dev"])
    last = pd.Series(["Okafor", None])
    joined = str_c(first, last, sep=" ")
    assert joined[0] == "Maya Okafor"
    assert pd.isna(joined[1])
    assert list(str_c(first, "!")) == ["Maya!", "Dev!"]


def test_str_split():
    s = ["a-b-c", "d"]
    assert list(str_split(s, "-")[0]) == ["a", "b", "c"]
    assert list(str_split(s, "-", n=2)[0]) == ["a", "b-c"]
    wide = str_split(s, "-", simplify=True)
    assert wide.shape == (2, 3)


def test_str_split_single_piece():
    s = pd.Series(["a-b-c", None])
    pieces = str_split(s, "-", n=1)
    assert pieces[0] == ["a-b-c"]
    assert pd.isna(pieces[1])
    wide = str_split(s, "-", n=1, simplify=True)
    assert wide.shape == (2, 1)
    assert wide.loc[0, 0] == "a-b-c"


@pytest.fixture
def family():
    return pd.DataFrame({
        "name": ["Maya Okafor", "June Okafor Lind", "Theo"],
        "phone": ["651-555-0142", "612-555-0110", "612-555-0199"],
    })


def test_separate_places_new_columns(family):
    out = separate(family, "phone", into=["area", "exchange", "line"], sep="-")
    assert list(out.columns) == ["name", "area", "exchange", "line"]
    assert list(out["area"]) == ["651", "612", "612"]


def test_separate_keep_original_and_convert(family):
    out = separate(family, "phone", into=["area", None, "line"], sep="-", remove=False, convert=True)
    assert list(out.columns) == ["name", "phone", "area", "line"]
    assert out["line"].tolist() == [142, 110, 199]


def test_separate_extra_and_fill(family, caplog):
    with caplog.at_level(logging.WARNING, logger="wrangling.strings"):
        out = separate(family, "name", into=["first", "last"], sep=" ")
    assert out["last"][1] == "Okafor"
    assert pd.isna(out["last"][2])
    assert "additional pieces" in caplog.text
    assert "missing pieces" in caplog.text

    merged = separate(family, "name", into=["first", "last"], sep=" ", extra="merge", fill="right")
    assert merged["last"][1] == "Okafor Lind"

    left = separate(family, "name", into=["first", "last"], sep=" ", extra="drop", fill="left")
    assert pd.isna(left["first"][2])
    assert left["last"][2] == "Theo"


def test_separate_merge_into_one_column(caplog):
    df = pd.DataFrame({"pets": ["dog-Biscuit-old", "fish"]})
    with caplog.at_level(logging.WARNING, logger="wrangling.strings"):
        out = separate(df, "pets", into=["all"], sep="-", extra="merge")
    assert list(out.columns) == ["all"]
    assert list(out["all"]) == ["dog-Biscuit-old", "fish"]
    assert caplog.text == ""


def test_separate_at_position():
    df = pd.DataFrame({"year": ["2004-05", "2015-16"]})
    out = separate(df, "year", into=["century", "rest"], sep=2)
    assert list(out["century"]) == ["20", "20"]
    assert list(out["rest"]) == ["04-05", "15-16"]


def test_separate_bad_arguments(family):
    with pytest.raises(KeyError):
        separate(family, "email", into=["a", "b"])
    with pytest.raises(ValueError):
        separate(family, "name", into=["a", "b"], extra="keep")
    with pytest.raises(ValueError):
        separate(family, "name", into=["a", "b", "c"], sep=2)


def test_separate_rows():
    df = pd.DataFrame({"name": ["Maya", "Dev"], "foods": ["tacos, pho; ice cream", "pizza"]})
    out = separate_rows(df, "foods", sep=r"\s*[,;]\s*")
    assert list(out["name"]) == ["Maya", "Maya", "Maya", "Dev"]
    assert list(out["foods"]) == ["tacos", "pho", "ice cream", "pizza"]


def test_separate_rows_parallel_columns_and_convert():
    df = pd.DataFrame({"plot": ["A,B"], "seeds": ["10,12"]})
    out = separate_rows(df, "plot", "seeds", sep=",", convert=True)
    assert list(out["plot"]) == ["A", "B"]
    assert out["seeds"].tolist() == [10, 12]


def test_unite():
    df = pd.DataFrame({"id": [1, 2], "first": ["Maya", "Theo"], "last": ["Okafor", None]})
    out = unite(df, "name", ["first", "last"], sep=" ")
    assert list(out.columns) == ["id", "name"]
    assert list(out["name"]) == ["Maya Okafor", "Theo NA"]

    kept = unite(df, "name", ["first", "last"], sep=" ", remove=False, na_rm=True)
    assert list(kept.columns) == ["id", "name", "first", "last"]
    assert list(kept["name"]) == ["Maya Okafor", "Theo"]


def test_extract():
    df = pd.DataFrame({"pets": ["dog:Biscuit", "goldfish"]})
    out = extract(df, "pets", into=["type", "pet"], regex=r"(\w+):(\w+)")
    assert list(out.columns) == ["type", "pet"]
    assert out["type"][0] == "dog"
    assert pd.isna(out["pet"][1])
    with pytest.raises(ValueError):
        extract(df, "pets", into=["type"], regex=r"(\w+):(\w+)")
