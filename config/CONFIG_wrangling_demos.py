"""
Config for the wrangling demonstrations
"""

import os
from dotenv import load_dotenv
load_dotenv()

# Bundled sample data is used unless remote loading is switched on
USE_REMOTE = os.getenv("WRANGLING_USE_REMOTE", "false").lower() in ("1", "true", "yes")

# Sources per dataset. url=None means only the bundled sample exists.
DATASETS = {
    "garden_harvest": {
        "url": os.getenv("GARDEN_HARVEST_URL"),
        "format": "csv",
        "sample": "garden_harvest.csv",
        "parse_dates": ["date"],
    },
    "garden_spending": {
        "url": os.getenv("GARDEN_SPENDING_URL"),
        "format": "csv",
        "sample": "garden_spending.csv",
    },
    "garden_planting": {
        "url": os.getenv("GARDEN_PLANTING_URL"),
        "format": "csv",
        "sample": "garden_planting.csv",
        "parse_dates": ["date"],
    },
    "garden_coords": {
        "url": os.getenv("GARDEN_COORDS_URL"),
        "format": "csv",
        "sample": "garden_coords.csv",
    },
    "penguins": {
        "url": os.getenv(
            "PENGUINS_URL",
            "https://raw.githubusercontent.com/allisonhorst/palmerpenguins/main/inst/extdata/penguins.csv",
        ),
        "format": "csv",
        "sample": "penguins.csv",
    },
    "tuition": {
        "url": os.getenv(
            "TUITION_URL",
            "https://github.com/rfordatascience/tidytuesday/raw/master/data/2018/2018-04-02/us_avg_tuition.xlsx",
        ),
        "format": "xlsx",
        "sample": "us_avg_tuition.csv",
    },
    # Built in memory by wrangling.samples
    "family": {
        "url": None,
        "format": "synthetic",
    },
}

# File Paths
DATA_DIR = os.getenv("WRANGLING_DATA_DIR", "data")
RAW_DATA_DIR = f"{DATA_DIR}/raw"
REPORT_DIR = f"{DATA_DIR}/report"
REPORT_FILE = f"{REPORT_DIR}/wrangling_demos.md"
PROFILE_DIR = f"{REPORT_DIR}/profiles"
