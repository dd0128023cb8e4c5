"""
Tests for wrangling/reshape.py
"""
import pandas as pd
import pytest

from wrangling.reshape import pivot_longer, pivot_wider, everything_except


@pytest.fixture
def tuition():
    return pd.DataFrame({
        "State": ["Alabama", "Alaska"],
        "2004-05": [5682.8, 4328.3],
        "2005-06": [5840.6, 4632.6],
    })


def test_everything_except(tuition):
    assert everything_except(tuition, "State") == ["2004-05", "2005-06"]


def test_pivot_longer_row_major(tuition):
    long = pivot_longer(tuition, cols=["2004-05", "2005-06"], names_to="year", values_to="avg_tuition")
    assert list(long.columns) == ["State", "year", "avg_tuition"]
    assert list(long["State"]) == ["Alabama", "Alabama", "Alaska", "Alaska"]
    assert list(long["year"]) == ["2004-05", "2005-06", "2004-05", "2005-06"]
    assert list(long["avg_tuition"]) == [5682.8, 5840.6, 4328.3, 4632.6]


def test_pivot_longer_does_not_mutate(tuition):
    before = tuition.copy()
    pivot_longer(tuition, cols=["2004-05"])
    pd.testing.assert_frame_equal(tuition, before)


def test_pivot_longer_prefix_and_transform():
    df = pd.DataFrame({"song": ["a"], "wk1": [87], "wk2": [82]})
    long = pivot_longer(df, cols=["wk1", "wk2"], names_to="week", names_prefix="wk",
                        names_transform=int, values_to="rank")
    assert list(long["week"]) == [1, 2]
    assert list(long["rank"]) == [87, 82]


def test_pivot_longer_names_sep():
    df = pd.DataFrame({"id": [1], "bill_length": [39.1], "bill_depth": [18.7]})
    long = pivot_longer(df, cols=["bill_length", "bill_depth"], names_to=["part", "measure"], names_sep="_")
    assert list(long.columns) == ["id", "part", "measure", "value"]
    assert list(long["part"]) == ["bill", "bill"]
    assert list(long["measure"]) == ["length", "depth"]


def test_pivot_longer_values_drop_na():
    df = pd.DataFrame({"id": [1, 2], "x": [1.0, None], "y": [None, 4.0]})
    long = pivot_longer(df, cols=["x", "y"], values_drop_na=True)
    assert len(long) == 2
    assert list(long["name"]) == ["x", "y"]
    assert list(long.index) == [0, 1]


def test_pivot_longer_bad_columns(tuition):
    with pytest.raises(ValueError):
        pivot_longer(tuition, cols=[])
    with pytest.raises(KeyError):
        pivot_longer(tuition, cols=["2020-21"])
    with pytest.raises(ValueError):
        pivot_longer(tuition, cols=["2004-05"], names_to=["a", "b"])


@pytest.fixture
def daily():
    return pd.DataFrame({
        "date": ["06-06", "06-06", "06-11"],
        "vegetable": ["peas", "beans", "peas"],
        "weight": [20, 10, 30],
    })


def test_pivot_wider_fill_keeps_integers(daily):
    wide = pivot_wider(daily, names_from="vegetable", values_from="weight", values_fill=0)
    assert list(wide.columns) == ["date", "peas", "beans"]
    assert list(wide["date"]) == ["06-06", "06-11"]
    assert list(wide["beans"]) == [10, 0]
    assert wide["beans"].dtype == "int64"


def test_pivot_wider_missing_cells_without_fill(daily):
    wide = pivot_wider(daily, names_from="vegetable", values_from="weight")
    assert pd.isna(wide.loc[1, "beans"])


def test_pivot_wider_fill_keeps_recorded_missing_values():
    df = pd.DataFrame({"date": ["a", "a", "b"], "veg": ["x", "y", "x"], "w": [1.0, None, 2.0]})
    wide = pivot_wider(df, names_from="veg", values_from="w", values_fill=0)
    # a/y was recorded as missing, b/y never appeared
    assert pd.isna(wide.loc[0, "y"])
    assert wide.loc[1, "y"] == 0
    assert list(wide["x"]) == [1.0, 2.0]


def test_pivot_wider_names_sort_and_prefix(daily):
    wide = pivot_wider(daily, names_from="vegetable", values_from="weight",
                       names_sort=True, names_prefix="g_", values_fill=0)
    assert list(wide.columns) == ["date", "g_beans", "g_peas"]


def test_pivot_wider_row_order_is_first_appearance():
    df = pd.DataFrame({"date": ["b", "a", "b"], "veg": ["x", "x", "y"], "w": [1, 2, 3]})
    wide = pivot_wider(df, names_from="veg", values_from="w")
    assert list(wide["date"]) == ["b", "a"]


def test_pivot_wider_duplicates_need_values_fn(daily):
    doubled = pd.concat([daily, daily.iloc[[0]]], ignore_index=True)
    with pytest.raises(ValueError):
        pivot_wider(doubled, names_from="vegetable", values_from="weight")

    wide = pivot_wider(doubled, names_from="vegetable", values_from="weight",
                       values_fn="sum", values_fill=0)
    assert list(wide["peas"]) == [40, 30]


def test_pivot_wider_without_id_columns():
    df = pd.DataFrame({"vegetable": ["peas", "beans"], "weight": [5, 7]})
    wide = pivot_wider(df, names_from="vegetable", values_from="weight")
    assert wide.shape == (1, 2)
    assert list(wide.columns) == ["peas", "beans"]
    assert wide.loc[0, "beans"] == 7


def test_pivot_wider_unknown_column(daily):
    with pytest.raises(KeyError):
        pivot_wider(daily, names_from="plot", values_from="weight")
