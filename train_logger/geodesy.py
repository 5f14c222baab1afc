"""
Geodesy Primitives for Train Logger

This module provides the distance and projection helpers used by the noise
filter, the threshold engine, the path decimator and the curvature
calculator.
"""

import numpy as np
from pyproj import Geod
from typing import Tuple

# WGS84 ellipsoid used for all point-to-point distances
_GEOD = Geod(ellps="WGS84")

# Equirectangular scale factors (metres per degree)
M_PER_DEG_LAT = 110540.0
M_PER_DEG_LON_EQUATOR = 111320.0


def geodesic_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the geodesic distance between two points on the WGS84 ellipsoid.

    Solves the inverse geodesic problem, which is symmetric in its arguments
    and returns exactly zero for coincident points.

    Args:
        lat1, lon1: Latitude and longitude of first point in degrees.
        lat2, lon2: Latitude and longitude of second point in degrees.

    Returns:
        Distance in meters between the two points.
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0
    _, _, distance = _GEOD.inv(lon1, lat1, lon2, lat2)
    return float(distance)


def latlon_to_local_xy(lats, lons, ref_lat: float, ref_lon: float,
                       mean_lat: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert latitude/longitude to local Cartesian coordinates (x, y).

    Uses a simple equirectangular projection approximation centred on the
    reference point, suitable for the sub-kilometre spans between consecutive
    log points where Earth's curvature can be approximated as flat.

    Args:
        lats: Sequence of latitude values in degrees.
        lons: Sequence of longitude values in degrees.
        ref_lat: Reference latitude in degrees (projection origin).
        ref_lon: Reference longitude in degrees (projection origin).
        mean_lat: Latitude in degrees used to scale longitude differences.

    Returns:
        Tuple of (x_m, y_m) arrays in meters, where x is east and y is north.
    """
    lats = np.asarray(lats, dtype=float)
    lons = np.asarray(lons, dtype=float)
    m_per_deg_lon = M_PER_DEG_LON_EQUATOR * np.cos(np.deg2rad(mean_lat))

    x = (lons - ref_lon) * m_per_deg_lon
    y = (lats - ref_lat) * M_PER_DEG_LAT

    return x, y
