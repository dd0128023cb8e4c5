"""
Tidy-data checks for the wrangling demonstration datasets
"""

# DQ_CHECKS: {dataset: {check_type: columns / {column: params}}}
# The DAG creates one task per dataset.
DQ_CHECKS = {

    "garden_harvest": {
        "null": ["vegetable", "variety", "date", "weight"],
    },

    # One row per (vegetable, variety): the join key of the cost demos
    "garden_spending": {
        "null": ["vegetable", "variety", "price"],
        "duplicates": {"key_columns": ["vegetable", "variety"]},
    },

    "garden_planting": {
        "null": ["plot", "vegetable", "variety", "date"],
        "duplicates": {"key_columns": ["plot", "vegetable", "variety", "date"]},
    },

    "garden_coords": {
        "null": ["plot", "long", "lat"],
    },

    "penguins": {
        "null": ["species", "island", "year"],
        "categorical": {
            "species": {"allowed_values": ["Adelie", "Chinstrap", "Gentoo"]},
            "island": {"allowed_values": ["Biscoe", "Dream", "Torgersen"]},
            "sex": {"allowed_values": ["male", "female"]},
        },
    },

    "tuition": {
        "null": ["State"],
        "duplicates": {"key_columns": ["State"]},
    },

    # phone format: "651-555-0142"
    "family": {
        "null": ["name", "birthday"],
        "string_format": {
            "phone": {"pattern": r"^\d{3}-\d{3}-\d{4}$"},
        },
        "duplicates": {"key_columns": ["name"]},
    },

}
