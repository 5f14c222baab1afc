"""
Menger Curvature for Train Logger

This module derives local path curvature from three consecutive logged
points P1, P2, P3. The result describes the bend of the path at P2.

Menger curvature is the reciprocal of the radius of the circle through the
three points:

    kappa = 4 * area / (d12 * d23 * d13) = 1 / R

Interpretation of curvature_percent (kappa x 100):
    0.0 %  straight (R infinite)
    0.1 %  gentle curve (R ~ 1000 m)
    0.2 %  moderate curve (R ~ 500 m)
    0.5 %  sharp curve (R ~ 200 m)
    1.0 %  very sharp curve (R ~ 100 m)
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional
from . import geodesy

# Denominators and curvatures below this are treated as degenerate
EPSILON = 1e-9


@dataclass(frozen=True)
class CurvatureResult:
    """
    Attributes:
        curvature: Menger curvature kappa in 1/m.
        curvature_percent: kappa x 100.
        radius_m: Circumscribed radius in meters, None for a straight path.
        area: Area of the triangle formed by the three points in m^2.
    """

    curvature: float
    curvature_percent: float
    radius_m: Optional[float]
    area: float


STRAIGHT = CurvatureResult(curvature=0.0, curvature_percent=0.0, radius_m=None, area=0.0)


def compute_menger_curvature(lat1: float, lon1: float,
                             lat2: float, lon2: float,
                             lat3: float, lon3: float) -> CurvatureResult:
    """
    Compute Menger curvature from three consecutive GPS nodes.

    Points are projected to a local XY frame centred on P1 with longitude
    scaled by the cosine of the mean latitude. This is accurate for the
    sub-kilometre spans between log points.

    Args:
        lat1, lon1: Second-to-last logged point in degrees.
        lat2, lon2: Last logged point in degrees (where curvature applies).
        lat3, lon3: Current point in degrees.

    Returns:
        CurvatureResult. Duplicate or degenerate points yield curvature 0
        and a None radius instead of dividing by zero.
    """
    mean_lat = (lat1 + lat2 + lat3) / 3.0
    xs, ys = geodesy.latlon_to_local_xy(
        [lat1, lat2, lat3], [lon1, lon2, lon3], lat1, lon1, mean_lat
    )
    x1, x2, x3 = xs
    y1, y2, y3 = ys

    cross = (x2 - x1) * (y3 - y1) - (y2 - y1) * (x3 - x1)
    area = abs(cross) / 2.0

    d12 = np.hypot(x2 - x1, y2 - y1)
    d23 = np.hypot(x3 - x2, y3 - y2)
    d13 = np.hypot(x3 - x1, y3 - y1)

    denominator = d12 * d23 * d13
    if denominator < EPSILON:
        return STRAIGHT

    kappa = float((4.0 * area) / denominator)
    radius = (1.0 / kappa) if kappa > EPSILON else None

    return CurvatureResult(
        curvature=kappa,
        curvature_percent=kappa * 100.0,
        radius_m=radius,
        area=float(area),
    )
