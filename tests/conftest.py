import pandas as pd
import pytest

from wrangling.extract import load_all


@pytest.fixture
def harvest():
    return pd.DataFrame({
        "vegetable": ["beans", "beans", "peas", "kale"],
        "variety": ["bush", "bush", "snap", "lacinato"],
        "weight": [10, 20, 30, 40],
    })


@pytest.fixture
def planting():
    return pd.DataFrame({
        "plot": ["D", "M", "B"],
        "vegetable": ["beans", "beans", "peas"],
        "variety": ["bush", "bush", "snap"],
    })


@pytest.fixture
def spending():
    return pd.DataFrame({
        "vegetable": ["beans", "kale"],
        "variety": ["bush", "lacinato"],
        "price": [2.99, 3.00],
    })


@pytest.fixture(scope="session")
def datasets():
    """Every dataset from the bundled samples"""
    return load_all(use_remote=False)
