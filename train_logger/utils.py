"""
Utility Functions for Train Logger

This module provides helper functions for numeric validation, rounding, and
formatting of nullable values used throughout the tracking pipeline.
"""

import numpy as np
from datetime import datetime, timezone
from typing import Optional


def is_finite(value) -> bool:
    """
    Check that a value is a real, finite number.

    Args:
        value: Value to check (may be None, NaN, Inf or non-numeric).

    Returns:
        True only for finite int/float values.
    """
    try:
        return bool(np.isfinite(float(value)))
    except (TypeError, ValueError):
        return False


def round_float(value, digits: int = 3) -> Optional[float]:
    """
    Round a float value, handling None, NaN, and Inf.

    Args:
        value: Value to round.
        digits: Number of decimal places. Default 3.

    Returns:
        Rounded float, or None if value is None, NaN, or Inf.
    """
    if value is None or (isinstance(value, float) and (np.isnan(value) or np.isinf(value))):
        return None
    return round(float(value), digits)


def format_optional(value: Optional[float], digits: int) -> str:
    """
    Format a nullable float with a fixed number of decimals.

    Args:
        value: Value to format.
        digits: Number of decimal places.

    Returns:
        Formatted string, or an empty string when value is None.
    """
    if value is None:
        return ""
    return f"{value:.{digits}f}"


def to_iso_utc(moment: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
