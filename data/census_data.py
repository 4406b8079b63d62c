"""
Census demographics by community area
"""

import logging
from pathlib import Path

import pandas as pd

from config import CENSUS_CSV

logger = logging.getLogger(__name__)

# census column -> analysis column
CENSUS_COLUMNS = {
    "GEOID": "area_code",
    "GEOG": "area_name",
    "TOT_POP": "total_population",
    "WHITE": "white",
    "BLACK": "black",
    "TOT_HH": "households",
    "AVG_HH_SIZE": "avg_household_size",
    "MEDINC": "median_income",
    "PER_CAPITA_INC": "per_capita_income",
    "HU_TOT": "housing_units",
    "VAC_HU": "vacant_units",
}


def load_census(path: Path = CENSUS_CSV) -> pd.DataFrame:
    """
    Read the census table. The first line of the file is a title,
    the header sits on the second line.
    """
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"{path} not found")

    census = pd.read_csv(path, skiprows=1)
    missing = set(CENSUS_COLUMNS) - set(census.columns)
    if missing:
        raise ValueError(f"Missing census columns: {sorted(missing)}")

    census = census[list(CENSUS_COLUMNS)].rename(columns=CENSUS_COLUMNS)
    census["area_code"] = pd.to_numeric(census["area_code"], errors="coerce").astype("Int64")
    for column in CENSUS_COLUMNS.values():
        if column not in ("area_code", "area_name"):
            census[column] = pd.to_numeric(census[column], errors="coerce")

    logger.info("Loaded census data for %d community areas", len(census))
    return census
