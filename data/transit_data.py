"""
train stop and rail line loading.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import geopandas as gpd
import pandas as pd

from config import RAIL_LINES_SHP, TRAIN_STOPS_CSV, WGS84

logger = logging.getLogger(__name__)


def parse_location(location: str) -> Tuple[Optional[float], Optional[float]]:
    """
    parse the composite location string of the stops file.

    format: "(lat, lon)" (e.g., "(41.875478, -87.626116)")
    """
    if pd.isna(location) or location == "":
        return None, None

    try:
        parts = str(location).strip().strip("()").split(",")
        if len(parts) == 2:
            lat = float(parts[0].strip())
            lon = float(parts[1].strip())
            return lat, lon
    except (ValueError, AttributeError):
        pass

    return None, None


def load_train_stops(path: Path = TRAIN_STOPS_CSV) -> pd.DataFrame:
    """
    read the "L" stops list and split its Location column into lat/lon.
    """
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"{path} not found")

    stops = pd.read_csv(path)
    if "Location" not in stops.columns:
        raise ValueError("Missing train stop column: Location")

    coords = stops["Location"].apply(parse_location)
    stops = stops.rename(columns={"STOP_NAME": "stop_name", "STATION_NAME": "station_name"})
    stops["lat"] = [lat for lat, _ in coords]
    stops["lon"] = [lon for _, lon in coords]
    stops["lat"] = pd.to_numeric(stops["lat"])
    stops["lon"] = pd.to_numeric(stops["lon"])

    logger.info("Loaded %d train stops", len(stops))
    return stops


def load_rail_lines(path: Path = RAIL_LINES_SHP) -> gpd.GeoDataFrame:
    """read the rail line shapefile and reproject it to lon/lat."""
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"{path} not found")

    rail_lines = gpd.read_file(path)
    if rail_lines.crs is None:
        raise ValueError("Rail lines have no CRS")

    rail_lines = rail_lines.to_crs(WGS84)
    logger.info("Loaded %d rail line segments", len(rail_lines))
    return rail_lines
