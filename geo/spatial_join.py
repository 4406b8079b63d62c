"""
spatial join of crime points to community areas.
"""

import logging

import geopandas as gpd
import pandas as pd

from config import WGS84

logger = logging.getLogger(__name__)


def crimes_to_geodataframe(crimes: pd.DataFrame) -> gpd.GeoDataFrame:
    """
    build point geometries from the lon/lat columns (WGS84).

    crimes must already be free of missing coordinates.
    """
    return gpd.GeoDataFrame(
        crimes.copy(),
        geometry=gpd.points_from_xy(crimes["lon"], crimes["lat"]),
        crs=WGS84,
    )


def assign_community_areas(
    crime_points: gpd.GeoDataFrame, community_areas: gpd.GeoDataFrame
) -> gpd.GeoDataFrame:
    """
    assign each crime point the area_code of the polygon containing it.

    every input point appears once in the result. points outside all
    polygons keep a null area_code. a point touching several polygons
    (overlap or shared boundary) takes the first of them in row order.
    """
    if crime_points.crs != community_areas.crs:
        community_areas = community_areas.to_crs(crime_points.crs)

    points = crime_points.reset_index(drop=True)
    # positional index, so index_right gives polygon row order
    areas = community_areas[["area_code", "geometry"]].reset_index(drop=True)
    joined = gpd.sjoin(points, areas, how="left", predicate="intersects")
    joined = joined.sort_values("index_right", kind="stable")
    joined = joined[~joined.index.duplicated(keep="first")].sort_index()
    joined = joined.drop(columns="index_right")

    unassigned = int(joined["area_code"].isna().sum())
    logger.info(
        "Assigned %d/%d crimes to a community area (%d outside all areas)",
        len(joined) - unassigned,
        len(joined),
        unassigned,
    )
    return joined
