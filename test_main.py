"""
end to end run of the analysis on small synthetic inputs.
"""

import logging

import geopandas as gpd
import numpy as np
import pandas as pd
import pytest
from shapely.geometry import LineString, box

import config
import main

WEST = (-87.70, 41.80, -87.60, 41.90)
EAST = (-87.60, 41.80, -87.50, 41.90)


def points_inside(rng, bounds, n):
    minx, miny, maxx, maxy = bounds
    return rng.uniform(minx + 0.005, maxx - 0.005, n), rng.uniform(miny + 0.005, maxy - 0.005, n)


def write_crimes(path, rng):
    rows = []

    def add(bounds, n, location):
        lons, lats = points_inside(rng, bounds, n)
        for lon, lat in zip(lons, lats):
            rows.append((location, lat, lon))

    add(WEST, 40, "STREET")
    add(EAST, 30, "SIDEWALK")
    add(WEST, 10, "RESIDENCE")
    for lat in (41.85, 41.86, 41.87, 41.88, 41.89):
        rows.append(("ALLEY", lat, -87.30))
    rows.extend([("STREET", np.nan, -87.65)] * 3)

    pd.DataFrame(
        {
            "ID": range(len(rows)),
            "Date": ["06/15/2010 11:00:00 PM"] * len(rows),
            "Primary Type": ["THEFT"] * len(rows),
            "Location Description": [location for location, _, _ in rows],
            "Latitude": [lat for _, lat, _ in rows],
            "Longitude": [lon for _, _, lon in rows],
        }
    ).to_csv(path, index=False)


def write_census(path):
    census = pd.DataFrame(
        {
            "GEOID": [1, 2, 3],
            "GEOG": ["West Side", "East Side", "No Crimes"],
            "TOT_POP": [17000, 34000, 5000],
            "WHITE": [8500, 10000, 4000],
            "BLACK": [4250, 20000, 500],
            "TOT_HH": [6000, 12000, 2000],
            "AVG_HH_SIZE": [2.8, 2.8, 2.5],
            "MEDINC": [40000, 35000, 90000],
            "PER_CAPITA_INC": [25000, 20000, 50000],
            "HU_TOT": [7000, 14000, 2100],
            "VAC_HU": [700, 2800, 100],
        }
    )
    with open(path, "w") as f:
        f.write("Community Data Snapshot\n")
        census.to_csv(f, index=False)


@pytest.fixture
def analysis_inputs(tmp_path, monkeypatch):
    rng = np.random.default_rng(3)

    crime_csv = tmp_path / "crimes.csv"
    write_crimes(crime_csv, rng)

    census_csv = tmp_path / "census.csv"
    write_census(census_csv)

    stops_csv = tmp_path / "stops.csv"
    pd.DataFrame(
        {
            "STOP_ID": [1, 2],
            "STOP_NAME": ["West", "East"],
            "STATION_NAME": ["West", "East"],
            "Location": ["(41.85, -87.65)", "(41.85, -87.55)"],
        }
    ).to_csv(stops_csv, index=False)

    areas_path = tmp_path / "areas.gpkg"
    gpd.GeoDataFrame(
        {"area_numbe": ["1", "2"], "community": ["WEST SIDE", "EAST SIDE"]},
        geometry=[box(*WEST), box(*EAST)],
        crs="EPSG:4326",
    ).to_crs("EPSG:3435").to_file(areas_path, driver="GPKG")

    rail_path = tmp_path / "rail.gpkg"
    gpd.GeoDataFrame(
        {"LINES": ["Green Line"]},
        geometry=[LineString([(-87.69, 41.85), (-87.51, 41.85)])],
        crs="EPSG:4326",
    ).to_crs("EPSG:3435").to_file(rail_path, driver="GPKG")

    figure_dir = tmp_path / "figures"
    monkeypatch.setattr(config, "CRIME_CSV", crime_csv)
    monkeypatch.setattr(config, "CENSUS_CSV", census_csv)
    monkeypatch.setattr(config, "TRAIN_STOPS_CSV", stops_csv)
    monkeypatch.setattr(config, "COMMUNITY_AREAS_SHP", areas_path)
    monkeypatch.setattr(config, "RAIL_LINES_SHP", rail_path)
    monkeypatch.setattr(config, "FIGURE_DIR", figure_dir)
    monkeypatch.setattr(config, "KDE_SAMPLE_SEED", 0)
    return figure_dir


def test_run_analysis_counts_street_crimes_per_area(analysis_inputs):
    table = main.run_analysis().set_index("area_code")

    assert sorted(table.index.tolist()) == [1, 2, 3]
    assert table.loc[1, "crime_count"] == 40
    assert table.loc[2, "crime_count"] == 30
    assert table.loc[1, "normalized_rate"] == pytest.approx(40 / 100000 / 17 * 17000)
    assert table.loc[2, "pct_vacant"] == pytest.approx(20.0)


def test_run_analysis_keeps_census_only_area(analysis_inputs):
    table = main.run_analysis().set_index("area_code")

    assert pd.isna(table.loc[3, "crime_count"])
    assert pd.isna(table.loc[3, "normalized_rate"])
    assert table.loc[3, "area_name"] == "No Crimes"


def test_run_analysis_writes_all_figures(analysis_inputs):
    main.run_analysis()

    written = sorted(path.name for path in analysis_inputs.glob("*.png"))
    assert written == [
        "crime_density.png",
        "rate_vs_household_size.png",
        "rate_vs_income.png",
        "rate_vs_race.png",
        "rate_vs_vacancy.png",
    ]


def test_run_analysis_logs_highest_rates(analysis_inputs, caplog):
    with caplog.at_level(logging.INFO):
        main.run_analysis()

    assert "Highest normalized rates" in caplog.text
    assert "East Side" in caplog.text
    assert "Densest crime location" in caplog.text
