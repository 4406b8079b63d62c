"""
Street crime vs. community area demographics, Chicago 2001-2017.

Runs the whole analysis top to bottom: load, filter, spatial join,
aggregate, census join, rates, plots.
"""

import logging

import config
from analysis.aggregation import build_analysis_table
from data.boundaries import load_community_areas
from data.census_data import load_census
from data.crime_data import (
    drop_missing_coordinates,
    filter_location_categories,
    load_crime_records,
)
from data.transit_data import load_rail_lines, load_train_stops
from geo.kde_heat_map import build_density_kde, density_peak, sample_points
from geo.spatial_join import assign_community_areas, crimes_to_geodataframe
from visualize.plots import (
    get_bounds,
    plot_demographic_scatters,
    plot_heat_map,
    show_or_save,
)

logger = logging.getLogger(__name__)

SCATTER_NAMES = ["rate_vs_income", "rate_vs_household_size", "rate_vs_vacancy", "rate_vs_race"]


def run_analysis():
    community_areas = load_community_areas(config.COMMUNITY_AREAS_SHP)
    train_stops = load_train_stops(config.TRAIN_STOPS_CSV)
    rail_lines = load_rail_lines(config.RAIL_LINES_SHP)
    census = load_census(config.CENSUS_CSV)

    crimes = load_crime_records(config.CRIME_CSV)
    street_crimes = filter_location_categories(crimes, config.LOCATION_CATEGORIES)
    del crimes
    street_crimes = drop_missing_coordinates(street_crimes)

    # sampled from the filtered crimes, independent of area assignment
    kde_sample = sample_points(street_crimes, config.KDE_SAMPLE_SIZE, seed=config.KDE_SAMPLE_SEED)

    crime_points = crimes_to_geodataframe(street_crimes)
    del street_crimes
    assigned = assign_community_areas(crime_points, community_areas)
    del crime_points

    table = build_analysis_table(assigned, census)
    del assigned

    logger.info(
        "Highest normalized rates:\n%s",
        table.sort_values("normalized_rate", ascending=False)
        .head(5)[["area_code", "area_name", "crime_count", "normalized_rate"]]
        .to_string(index=False),
    )

    bounds = get_bounds(community_areas)
    kde = build_density_kde(kde_sample)
    peak_lon, peak_lat = density_peak(kde, bounds)
    logger.info("Densest crime location: lon=%.4f, lat=%.4f", peak_lon, peak_lat)

    fig, _ = plot_heat_map(kde, community_areas, train_stops, rail_lines, bounds=bounds)
    show_or_save(fig, "crime_density", config.FIGURE_DIR)

    for name, fig in zip(SCATTER_NAMES, plot_demographic_scatters(table)):
        show_or_save(fig, name, config.FIGURE_DIR)

    return table


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    run_analysis()
