"""
Crime record loading and filtering
"""

import logging
from pathlib import Path

import pandas as pd

from config import CRIME_CSV, CRIME_PORTAL_URL, LOCATION_CATEGORIES

logger = logging.getLogger(__name__)

# portal column -> analysis column
CRIME_COLUMNS = {
    "Primary Type": "crime_type",
    "Date": "date",
    "Location Description": "location_description",
    "Latitude": "lat",
    "Longitude": "lon",
}


def load_crime_records(path: Path = CRIME_CSV) -> pd.DataFrame:
    """
    read the crime extract and keep only the columns used downstream.

    raises RuntimeError if the file is missing and ValueError if any of
    the expected portal columns are absent.
    """
    path = Path(path)
    if not path.exists():
        raise RuntimeError(
            f"{path} not found, please download it here: {CRIME_PORTAL_URL}"
        )

    header = pd.read_csv(path, nrows=0).columns
    missing = set(CRIME_COLUMNS) - set(header)
    if missing:
        raise ValueError(f"Missing crime columns: {sorted(missing)}")

    crimes = pd.read_csv(
        path,
        usecols=list(CRIME_COLUMNS),
        on_bad_lines="skip",
        low_memory=False,
    ).rename(columns=CRIME_COLUMNS)
    logger.info("Loaded %d crime records from %s", len(crimes), path)
    return crimes


def filter_location_categories(
    crimes: pd.DataFrame, categories=LOCATION_CATEGORIES
) -> pd.DataFrame:
    """keep only crimes whose location description is one of `categories`."""
    mask = crimes["location_description"].isin(categories)
    filtered = crimes.loc[mask].copy()
    logger.info(
        "Kept %d/%d crimes in locations %s", len(filtered), len(crimes), ", ".join(categories)
    )
    return filtered


def drop_missing_coordinates(crimes: pd.DataFrame) -> pd.DataFrame:
    valid = crimes.copy()
    valid["lat"] = pd.to_numeric(valid["lat"], errors="coerce")
    valid["lon"] = pd.to_numeric(valid["lon"], errors="coerce")
    valid = valid.dropna(subset=["lat", "lon"])
    logger.info("Dropped %d crimes without coordinates", len(crimes) - len(valid))
    return valid
