"""
Altitude Smoothing for Train Logger

This module keeps a short FIFO window of raw GPS altitude samples and
reports its median as the live and logged altitude.
"""

import numpy as np
from collections import deque
from typing import Deque


def new_window(size: int) -> Deque[float]:
    """Create an empty altitude window holding at most ``size`` samples."""
    return deque(maxlen=size)


def push_altitude(window: Deque[float], altitude: float) -> None:
    """
    Append a raw altitude sample, evicting the oldest when the window is full.

    Args:
        window: Bounded window created by new_window().
        altitude: Raw altitude in meters.
    """
    window.append(float(altitude))


def smoothed_altitude(window: Deque[float]) -> float:
    """
    Median of the current window.

    For even window lengths this is the mean of the two central values.

    Args:
        window: Altitude samples in meters.

    Returns:
        Median altitude in meters, or 0.0 when the window is empty.
    """
    if not window:
        return 0.0
    return float(np.median(np.fromiter(window, dtype=float)))
