import logging
from pathlib import Path

import geopandas as gpd
import pandas as pd

from config import COMMUNITY_AREAS_SHP, WGS84

logger = logging.getLogger(__name__)

# the city export truncates field names to 10 characters
CODE_COLUMNS = ("area_numbe", "area_num_1", "area_number")
NAME_COLUMNS = ("community", "area_name")


def _first_present(columns, candidates):
    for name in candidates:
        if name in columns:
            return name
    return None


def load_community_areas(path: Path = COMMUNITY_AREAS_SHP) -> gpd.GeoDataFrame:
    """
    Read the community area boundaries as a GeoDataFrame with
    integer area_code, area_name and geometry in lon/lat.
    """
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"{path} not found")

    areas = gpd.read_file(path)
    if areas.crs is None:
        raise ValueError("Community areas have no CRS")

    code_column = _first_present(areas.columns, CODE_COLUMNS)
    if code_column is None:
        raise ValueError(f"Missing community area code column, expected one of {CODE_COLUMNS}")
    name_column = _first_present(areas.columns, NAME_COLUMNS)

    areas["area_code"] = pd.to_numeric(areas[code_column], errors="coerce").astype("Int64")
    areas["area_name"] = areas[name_column] if name_column else pd.NA
    areas = areas[["area_code", "area_name", "geometry"]].to_crs(WGS84)

    logger.info("Loaded %d community areas", len(areas))
    return areas
