"""
kde heat map module.
"""

from typing import Optional, Tuple

import numpy as np
import pandas as pd
from scipy.stats import gaussian_kde

from config import KDE_SAMPLE_SIZE


def sample_points(
    points: pd.DataFrame, n: int = KDE_SAMPLE_SIZE, seed: Optional[int] = None
) -> pd.DataFrame:
    """
    draw a random sample of at most n points.

    the sample only bounds rendering cost; pass a seed to make it reproducible.

    args:
        points: dataframe with lat/lon columns
        n: maximum sample size
        seed: random seed (if None, the sample differs between runs)

    returns:
        sampled dataframe (all points when there are n or fewer)
    """
    if len(points) <= n:
        return points.copy()
    return points.sample(n=n, random_state=seed)


def build_density_kde(
    points: pd.DataFrame, bandwidth: Optional[float] = None
) -> gaussian_kde:
    """
    build a KDE over crime locations in lon/lat.

    args:
        points: dataframe with columns:
            - lat: latitude (WGS84)
            - lon: longitude (WGS84)
        bandwidth: bandwidth for KDE (if None, uses scipy's default)

    returns:
        fitted KDE object
    """
    valid_data = points[points["lat"].notna() & points["lon"].notna()]

    if len(valid_data) < 2:
        raise ValueError("Need at least two points with coordinates to build a KDE")

    kde_data = np.vstack([valid_data["lon"].values, valid_data["lat"].values])

    if bandwidth is not None:
        kde = gaussian_kde(kde_data, bw_method=bandwidth)
    else:
        kde = gaussian_kde(kde_data)

    return kde


def evaluate_density_grid(
    kde: gaussian_kde,
    bounds: Tuple[float, float, float, float],
    resolution: int = 200,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    evaluate KDE on a regular lon/lat grid.

    args:
        kde: fitted gaussian_kde object
        bounds: (minx, miny, maxx, maxy) in lon/lat, as GeoDataFrame.total_bounds
        resolution: number of grid cells along each axis

    returns:
        tuple of (lon grid, lat grid, density grid), each of shape (resolution, resolution)
    """
    minx, miny, maxx, maxy = bounds
    if minx >= maxx or miny >= maxy:
        raise ValueError("bounds must be (minx, miny, maxx, maxy) with min < max")

    xx, yy = np.mgrid[
        minx : maxx : complex(0, resolution),
        miny : maxy : complex(0, resolution),
    ]
    grid_points = np.vstack([xx.ravel(), yy.ravel()])

    density = kde(grid_points).reshape(xx.shape)

    # non-negative
    density = np.maximum(density, 0.0)

    return xx, yy, density


def density_peak(
    kde: gaussian_kde,
    bounds: Tuple[float, float, float, float],
    resolution: int = 100,
) -> Tuple[float, float]:
    """lon/lat of the densest grid cell."""
    xx, yy, density = evaluate_density_grid(kde, bounds, resolution=resolution)
    i, j = np.unravel_index(np.argmax(density), density.shape)
    return float(xx[i, j]), float(yy[i, j])
