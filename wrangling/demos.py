"""
Demonstrations
Each demo is a pure function of the loaded datasets returning a DataFrame
"""

import pandas as pd
from typing import Callable, Dict, List, Tuple
from wrangling.reshape import pivot_longer, pivot_wider, everything_except
from wrangling.join import (
    left_join, inner_join, full_join, semi_join, anti_join, join_report,
)
from wrangling.factors import (
    fct_count, fct_infreq, fct_rev, fct_relevel, fct_reorder, fct_recode, fct_lump_n, levels,
)
from wrangling.strings import (
    str_detect, str_length, str_sub, str_to_upper, str_replace_all,
    separate, separate_rows, extract, unite,
)
from wrangling.samples import calculate_age

Datasets = Dict[str, pd.DataFrame]

VARIETY_KEYS = ["vegetable", "variety"]


# Reshaping

def harvest_daily_wide(d: Datasets) -> pd.DataFrame:
    """Daily harvest weight (g) with one column per vegetable, 0 where nothing was picked"""
    harvest = d["garden_harvest"][["date", "vegetable", "weight"]]
    return pivot_wider(harvest, names_from="vegetable", values_from="weight",
                       values_fn="sum", values_fill=0)


def tuition_long(d: Datasets) -> pd.DataFrame:
    """Average tuition with one row per state and academic year"""
    tuition = d["tuition"]
    long = pivot_longer(tuition, cols=everything_except(tuition, "State"),
                        names_to="year", values_to="avg_tuition")
    return separate(long, "year", into=["start_year", None], sep="-", remove=False, convert=True)


def penguin_measurements_long(d: Datasets) -> pd.DataFrame:
    """Penguin length measurements (mm) stacked into one column"""
    penguins = d["penguins"][["species", "island", "bill_length_mm", "bill_depth_mm", "flipper_length_mm"]]
    return pivot_longer(penguins, cols=["bill_length_mm", "bill_depth_mm", "flipper_length_mm"],
                        names_to="measurement", values_to="mm",
                        names_transform=lambda name: name.replace("_mm", ""),
                        values_drop_na=True)


# Joining

def harvest_with_cost(d: Datasets) -> pd.DataFrame:
    """Every harvest with the seed cost of its variety (missing for varieties not bought)"""
    joined = left_join(d["garden_harvest"], d["garden_spending"], by=VARIETY_KEYS)
    return joined[["vegetable", "variety", "date", "weight", "brand", "price_with_tax"]]


def harvest_with_renamed_keys(d: Datasets) -> pd.DataFrame:
    """Joining on keys with different names: harvest.vegetable = spending.veg"""
    spending = d["garden_spending"].rename(columns={"vegetable": "veg"})
    joined = inner_join(d["garden_harvest"], spending, by={"vegetable": "veg", "variety": "variety"})
    return joined[["vegetable", "variety", "date", "weight", "price"]]


def cost_per_kilogram(d: Datasets) -> pd.DataFrame:
    """Seed cost per kilogram harvested, for varieties that were bought and harvested"""
    totals = (
        d["garden_harvest"]
        .groupby(VARIETY_KEYS, as_index=False)["weight"]
        .sum()
        .rename(columns={"weight": "total_weight"})
    )
    joined = inner_join(totals, d["garden_spending"], by=VARIETY_KEYS, relationship="one_to_one")
    joined["cost_per_kg"] = (joined["price_with_tax"] / (joined["total_weight"] / 1000)).round(2)
    return (
        joined[VARIETY_KEYS + ["total_weight", "price_with_tax", "cost_per_kg"]]
        .sort_values("cost_per_kg")
        .reset_index(drop=True)
    )


def harvest_planting_blowup(d: Datasets) -> pd.DataFrame:
    """Varieties planted in several plots: each harvest repeats once per plot"""
    joined = left_join(d["garden_harvest"], d["garden_planting"], by=VARIETY_KEYS,
                       suffixes=("_harvest", "_planted"))
    return joined[["vegetable", "variety", "date_harvest", "weight", "plot", "date_planted"]]


def harvest_planting_report(d: Datasets) -> pd.DataFrame:
    """Row counts behind the blow-up: harvests in, joined rows out"""
    report = join_report(d["garden_harvest"], d["garden_planting"], by=VARIETY_KEYS)
    report["by"] = ", ".join(report["by"])
    return pd.DataFrame([report])


def spending_planting_full(d: Datasets) -> pd.DataFrame:
    """Everything bought and everything planted, matched where possible"""
    spending = d["garden_spending"][VARIETY_KEYS + ["brand"]]
    planting = d["garden_planting"][["plot"] + VARIETY_KEYS]
    return full_join(spending, planting, by=VARIETY_KEYS)


def bought_and_harvested(d: Datasets) -> pd.DataFrame:
    """Seed purchases that produced at least one harvest"""
    return semi_join(d["garden_spending"], d["garden_harvest"], by=VARIETY_KEYS)


def harvested_not_bought(d: Datasets) -> pd.DataFrame:
    """Harvested varieties with no seed purchase (perennials, reseeded lettuce)"""
    unmatched = anti_join(d["garden_harvest"], d["garden_spending"], by=VARIETY_KEYS)
    return unmatched[VARIETY_KEYS].drop_duplicates().reset_index(drop=True)


def plots_without_planting(d: Datasets) -> pd.DataFrame:
    """Garden plots with coordinates but nothing planted"""
    unplanted = anti_join(d["garden_coords"], d["garden_planting"], by="plot")
    return unplanted[["plot"]].drop_duplicates().reset_index(drop=True)


# Factors

def vegetables_by_frequency(d: Datasets) -> pd.DataFrame:
    """Number of harvests per vegetable, most frequent first"""
    return fct_count(fct_infreq(d["garden_harvest"]["vegetable"]))


def vegetables_least_frequent_first(d: Datasets) -> pd.DataFrame:
    """The same counts with the frequency order reversed"""
    return fct_count(fct_rev(fct_infreq(d["garden_harvest"]["vegetable"])))


def vegetables_by_median_weight(d: Datasets) -> pd.DataFrame:
    """Vegetables ordered by the median weight of a harvest, heaviest first"""
    harvest = d["garden_harvest"]
    vegetable = fct_reorder(harvest["vegetable"], harvest["weight"], desc=True)
    medians = harvest.groupby("vegetable")["weight"].median()
    order = levels(vegetable)
    return pd.DataFrame({"vegetable": order, "median_weight": medians.reindex(order).values})


def top_vegetables_lumped(d: Datasets) -> pd.DataFrame:
    """The three most harvested vegetables, everything else lumped together"""
    return fct_count(fct_lump_n(d["garden_harvest"]["vegetable"], 3), sort=True)


def penguin_islands_relevel(d: Datasets) -> pd.DataFrame:
    """Island levels with Torgersen moved to the front"""
    return fct_count(fct_relevel(d["penguins"]["island"], "Torgersen"))


def penguin_species_recode(d: Datasets) -> pd.DataFrame:
    """Species levels renamed to their common names"""
    species = fct_recode(d["penguins"]["species"], {
        "Adélie penguin": "Adelie",
        "Chinstrap penguin": "Chinstrap",
        "Gentoo penguin": "Gentoo",
    })
    return fct_count(species)


# Strings

def variety_strings(d: Datasets) -> pd.DataFrame:
    """Length, upper case, first three letters and a pattern test for each variety"""
    varieties = d["garden_harvest"][VARIETY_KEYS].drop_duplicates().reset_index(drop=True)
    return varieties.assign(
        length=str_length(varieties["variety"]),
        upper=str_to_upper(varieties["variety"]),
        first_three=str_sub(varieties["variety"], 1, 3),
        has_space=str_detect(varieties["variety"], r"\s"),
        slug=str_replace_all(varieties["variety"], r"[^A-Za-z]+", "-"),
    )


def family_names(d: Datasets) -> pd.DataFrame:
    """Names split into first and last, flagging hyphenated last names"""
    names = separate(d["family"][["name"]], "name", into=["first", "last"], sep=" ", extra="merge")
    names["hyphenated"] = str_detect(names["last"], "-")
    return names


def family_foods(d: Datasets) -> pd.DataFrame:
    """One row per person and favorite food"""
    return separate_rows(d["family"][["name", "favorite_foods"]], "favorite_foods", sep=r"\s*[,;]\s*")


def family_contacts(d: Datasets) -> pd.DataFrame:
    """Phone numbers split into parts, pets pulled apart with a regex, name and area code re-united"""
    family = d["family"][["name", "phone", "pets"]]
    contacts = separate(family, "phone", into=["area_code", "exchange", "line"], sep="-", remove=False)
    contacts = extract(contacts, "pets", into=["pet_type", "pet_name"], regex=r"(\w+):(\w+)")
    return unite(contacts, "name_area", ["name", "area_code"], sep=" @ ", remove=False)


def family_ages(d: Datasets) -> pd.DataFrame:
    """Age of each family member"""
    return calculate_age(d["family"][["name", "birthday"]])


# Report order: (section, title, demo)
DEMOS: List[Tuple[str, str, Callable[[Datasets], pd.DataFrame]]] = [
    ("Reshaping", "Pivot wider: daily harvest by vegetable", harvest_daily_wide),
    ("Reshaping", "Pivot longer: tuition by year", tuition_long),
    ("Reshaping", "Pivot longer: penguin measurements", penguin_measurements_long),
    ("Joining", "Left join: harvest and seed cost", harvest_with_cost),
    ("Joining", "Inner join on differently named keys", harvest_with_renamed_keys),
    ("Joining", "Inner join: cost per kilogram", cost_per_kilogram),
    ("Joining", "Multi-key join blow-up: harvest and planting", harvest_planting_blowup),
    ("Joining", "Join blow-up row counts", harvest_planting_report),
    ("Joining", "Full join: spending and planting", spending_planting_full),
    ("Joining", "Semi join: bought and harvested", bought_and_harvested),
    ("Joining", "Anti join: harvested but not bought", harvested_not_bought),
    ("Joining", "Anti join: plots without planting", plots_without_planting),
    ("Factors", "Levels by frequency", vegetables_by_frequency),
    ("Factors", "Reversed levels", vegetables_least_frequent_first),
    ("Factors", "Levels by median weight", vegetables_by_median_weight),
    ("Factors", "Lumping rare levels", top_vegetables_lumped),
    ("Factors", "Moving a level to the front", penguin_islands_relevel),
    ("Factors", "Renaming levels", penguin_species_recode),
    ("Strings", "Variety string functions", variety_strings),
    ("Strings", "Separate: first and last names", family_names),
    ("Strings", "Separate rows: favorite foods", family_foods),
    ("Strings", "Separate, extract and unite: contacts", family_contacts),
    ("Strings", "Ages from birthdays", family_ages),
]
