"""
paths and constants shared by the analysis.

every input path can be overridden with an environment variable of the same name.
"""

import os
from pathlib import Path

DATA_DIR = Path(os.getenv("DATA_DIR", Path(__file__).parent / "data"))

CRIME_CSV = Path(os.getenv("CRIME_CSV", DATA_DIR / "Crimes_-_2001_to_present.csv"))
TRAIN_STOPS_CSV = Path(os.getenv("TRAIN_STOPS_CSV", DATA_DIR / "CTA_-_System_Information_-_List_of__L__Stops.csv"))
COMMUNITY_AREAS_SHP = Path(
    os.getenv("COMMUNITY_AREAS_SHP", DATA_DIR / "community_areas" / "geo_export.shp")
)
RAIL_LINES_SHP = Path(os.getenv("RAIL_LINES_SHP", DATA_DIR / "cta_rail_lines" / "CTA_RailLines.shp"))
CENSUS_CSV = Path(os.getenv("CENSUS_CSV", DATA_DIR / "census_community_areas.csv"))

# unset or empty -> figures are shown interactively
FIGURE_DIR = os.getenv("FIGURE_DIR") or None

KDE_SAMPLE_SEED = os.getenv("KDE_SAMPLE_SEED")
KDE_SAMPLE_SEED = int(KDE_SAMPLE_SEED) if KDE_SAMPLE_SEED else None

LOCATION_CATEGORIES = ("STREET", "SIDEWALK", "ALLEY")

# the crime extract covers 2001-2017
YEARS_SPANNED = 17
RATE_PER = 100000

KDE_SAMPLE_SIZE = 10000

WGS84 = "EPSG:4326"

CRIME_PORTAL_URL = "https://data.cityofchicago.org/Public-Safety/Crimes-2001-to-present/ijzp-q8t2"
