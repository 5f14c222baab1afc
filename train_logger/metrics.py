"""
Metrics Computation for Train Logger

This module computes the per-record derived metrics: grade between
consecutive logged points, the elevation delta feeding it, and the
threshold-crossing predicate of the distance accumulator.
"""

from typing import Optional
from . import utils

# Segments at or below this length carry no elevation delta or grade
MIN_GRADE_SEGMENT_M = 1.0


def compute_grade_percent(elevation_delta_m: float, segment_distance_m: float) -> float:
    """
    Compute percentage grade over a segment.

    Args:
        elevation_delta_m: Altitude change over the segment in meters.
        segment_distance_m: Horizontal segment length in meters.

    Returns:
        (elevation_delta / segment_distance) x 100, or 0.0 for a
        non-positive segment length.
    """
    if segment_distance_m <= 0:
        return 0.0
    return (elevation_delta_m / segment_distance_m) * 100.0


def has_crossed_threshold(total_distance_m: float, next_threshold_m: float) -> bool:
    """Check whether a cumulative distance has reached the next log threshold."""
    return total_distance_m >= next_threshold_m


def elevation_delta(smoothed_altitude_m: Optional[float], reference_altitude_m: float,
                    segment_distance_m: float) -> Optional[float]:
    """
    Altitude change since the last logged point.

    Args:
        smoothed_altitude_m: Current smoothed altitude in meters, or None when
            no altitude sample has been seen.
        reference_altitude_m: Altitude recorded with the last logged point.
        segment_distance_m: Distance from the last logged point in meters.

    Returns:
        Altitude difference in meters, or None when the segment is too short
        for a meaningful grade or either altitude is unknown.
    """
    if segment_distance_m <= MIN_GRADE_SEGMENT_M:
        return None
    if not utils.is_finite(smoothed_altitude_m) or not utils.is_finite(reference_altitude_m):
        return None
    return smoothed_altitude_m - reference_altitude_m
