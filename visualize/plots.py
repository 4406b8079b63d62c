from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt

from geo.kde_heat_map import evaluate_density_grid

SCATTER_PANELS = [
    ("median_income", "Median household income ($)"),
    ("avg_household_size", "Average household size"),
    ("pct_vacant", "Vacant housing (%)"),
]


def get_bounds(community_areas, buffer=0.01):
    """
    Bounding box (minx, miny, maxx, maxy) around the community areas, with a buffer
    in degrees.
    """
    minx, miny, maxx, maxy = community_areas.total_bounds
    return minx - buffer, miny - buffer, maxx + buffer, maxy + buffer


def plot_heat_map(
    kde,
    community_areas,
    train_stops=None,
    rail_lines=None,
    bounds=None,
    resolution: int = 200,
):
    """
    Crime density surface with community area outlines, train stops and rail lines on top.
    """
    if bounds is None:
        bounds = get_bounds(community_areas)

    xx, yy, density = evaluate_density_grid(kde, bounds, resolution=resolution)

    fig, ax = plt.subplots(figsize=(10, 12))
    ax.contourf(xx, yy, density, levels=20, cmap=plt.cm.inferno)

    community_areas.boundary.plot(ax=ax, color="white", linewidth=0.5)

    if rail_lines is not None and not rail_lines.empty:
        rail_lines.plot(ax=ax, color="cyan", linewidth=1.2)

    if train_stops is not None and not train_stops.empty:
        ax.scatter(
            train_stops["lon"],
            train_stops["lat"],
            s=8,
            c="cyan",
            edgecolors="black",
            linewidths=0.3,
            zorder=3,
        )

    minx, miny, maxx, maxy = bounds
    ax.set_xlim(minx, maxx)
    ax.set_ylim(miny, maxy)
    ax.set_title("Street, Sidewalk and Alley Crime Density", fontsize=14, fontweight="bold")
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")

    return fig, ax


def plot_rate_scatter(table, x_column: str, xlabel: Optional[str] = None, ax=None):
    """Normalized crime rate against one column of the analysis table."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))
    else:
        fig = ax.figure

    data = table[[x_column, "normalized_rate"]].dropna()
    ax.scatter(data[x_column], data["normalized_rate"], s=20, alpha=0.7)
    ax.set_xlabel(xlabel or x_column)
    ax.set_ylabel("Crimes per 100k residents per year")
    ax.set_title(f"Crime rate vs. {xlabel or x_column}", fontsize=11)

    return fig, ax


def plot_race_scatter(table, ax=None):
    """Normalized crime rate against percent Black and percent White on the same axes."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))
    else:
        fig = ax.figure

    for column, label, color in (
        ("pct_black", "Black", "tab:purple"),
        ("pct_white", "White", "tab:orange"),
    ):
        data = table[[column, "normalized_rate"]].dropna()
        ax.scatter(data[column], data["normalized_rate"], s=20, alpha=0.7, c=color, label=label)

    ax.set_xlabel("Share of population (%)")
    ax.set_ylabel("Crimes per 100k residents per year")
    ax.set_title("Crime rate vs. race", fontsize=11)
    ax.legend()

    return fig, ax


def plot_demographic_scatters(table):
    """
    The four scatter plots of the analysis, one figure each:
    rate vs. income, household size, vacancy and race.
    """
    figures = []
    for column, label in SCATTER_PANELS:
        fig, _ = plot_rate_scatter(table, column, xlabel=label)
        figures.append(fig)

    fig, _ = plot_race_scatter(table)
    figures.append(fig)

    return figures


def show_or_save(fig, name: str, figure_dir=None):
    """
    Show the figure, or write it as PNG when figure_dir is set.
    Returns the written path, or None when shown.
    """
    if figure_dir is None:
        fig.tight_layout()
        plt.show()
        return None

    figure_dir = Path(figure_dir)
    figure_dir.mkdir(parents=True, exist_ok=True)
    path = figure_dir / f"{name}.png"
    fig.savefig(path, format="png", bbox_inches="tight", dpi=150)
    plt.close(fig)
    return path
