"""
Per-area aggregation, census join and derived rates.
"""

import logging

import pandas as pd

from config import RATE_PER, YEARS_SPANNED

logger = logging.getLogger(__name__)


def count_crimes_by_area(assigned: pd.DataFrame) -> pd.DataFrame:
    """
    Count crimes per community area. Crimes without an area_code are dropped.
    """
    located = assigned.dropna(subset=["area_code"])
    counts = (
        located.groupby("area_code")
        .size()
        .rename("crime_count")
        .reset_index()
    )
    counts["area_code"] = counts["area_code"].astype("Int64")
    return counts


def join_demographics(counts: pd.DataFrame, census: pd.DataFrame) -> pd.DataFrame:
    """
    Full join of per-area counts with census data on area_code.

    Areas present in only one table are kept with nulls for the other
    side's columns. Rows without a code are dropped, and for duplicated
    codes only the first row is kept.
    """
    counts = counts.dropna(subset=["area_code"]).astype({"area_code": "Int64"})
    census = census.dropna(subset=["area_code"]).astype({"area_code": "Int64"})

    joined = pd.merge(counts, census, on="area_code", how="outer")
    joined = joined.drop_duplicates(subset="area_code", keep="first")

    only_counts = set(counts["area_code"]) - set(census["area_code"])
    only_census = set(census["area_code"]) - set(counts["area_code"])
    if only_counts:
        logger.warning("Areas with crimes but no census data: %s", sorted(only_counts))
    if only_census:
        logger.warning("Areas with census data but no crimes: %s", sorted(only_census))

    return joined.reset_index(drop=True)


def normalized_rate(raw_count, total_population, years=YEARS_SPANNED, per=RATE_PER):
    """Annualized crime rate: raw_count / per / years * total_population."""
    return raw_count / per / years * total_population


def add_derived_rates(table: pd.DataFrame) -> pd.DataFrame:
    derived = table.copy()
    derived["normalized_rate"] = normalized_rate(
        derived["crime_count"], derived["total_population"]
    )
    derived["pct_black"] = derived["black"] / derived["total_population"] * 100
    derived["pct_white"] = derived["white"] / derived["total_population"] * 100
    derived["pct_vacant"] = derived["vacant_units"] / derived["housing_units"] * 100
    return derived


def build_analysis_table(assigned: pd.DataFrame, census: pd.DataFrame) -> pd.DataFrame:
    """
    Count assigned crimes per area, join with census data and derive rates.
    """
    counts = count_crimes_by_area(assigned)
    joined = join_demographics(counts, census)
    table = add_derived_rates(joined)
    logger.info("Built analysis table with %d community areas", len(table))
    return table
