"""
Synthetic sample data
A four-row family table used by the string demonstrations
"""

import pandas as pd
import logging
from datetime import datetime
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)


def family_table() -> pd.DataFrame:
    """Four-row synthetic family table"""
    return pd.DataFrame({
        "name": ["Maya Okafor", "Dev Okafor", "June Okafor-Lind", "Theo Lind"],
        "birthday": ["1981-03-14", "1979-11-02", "2010-06-30", "2013-01-09"],
        "phone": ["651-555-0142", "651-555-0187", "612-555-0110", "612-555-0199"],
        "favorite_foods": ["tacos, pho; ice cream", "pizza", "ice cream, pizza", "pho; noodles"],
        "pets": ["dog:Biscuit", "dog:Biscuit", "cat:Mochi", "fish:Bubbles"],
    })


def calculate_age(df: pd.DataFrame, column: str = "birthday",
                  reference_date: datetime = None) -> pd.DataFrame:
    """
    Calculate age as "N years M months"

    Args:
        df: DataFrame with a date-like birthday column
        column: Column holding the birth dates
        reference_date: Reference date (defaults to today)

    Returns:
        New DataFrame with an age column added
    """
    if reference_date is None:
        reference_date = datetime.now()

    def calc_age(birthday):
        born = pd.Timestamp(birthday).to_pydatetime()
        age = relativedelta(reference_date, born)

        if age.years < 0 or age.months < 0 or age.days < 0:
            return "0 years 0 months"

        return f"{age.years} years {age.months} months"

    df = df.copy()
    df["age"] = df[column].apply(calc_age)
    logger.info(f"✓ Calculated age for {len(df)} records")

    return df
