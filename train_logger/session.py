"""
Tracking Session State for Train Logger

This module holds the single mutable accumulator of a tracking run: distance
totals, the last accepted and last logged points, the altitude window, the
decimated display path and the live values shown to the user.
"""

import logging
from collections import deque
from typing import Deque, Dict, Optional, Sequence, Tuple
from . import altitude
from . import utils
from .config import DEFAULT_CONFIG, TrackingConfig
from .models import AcceptedPoint, LogRecord

logger = logging.getLogger(__name__)


class TrackingSession:
    """
    Mutable state of one tracking run.

    Owned by a single writer: the tracking service mutates it while processing
    a fix, everything else only reads it.
    """

    def __init__(self, config: TrackingConfig = DEFAULT_CONFIG):
        self.config = config
        self.reset()

    def reset(self) -> None:
        """Return every field to its fresh-session value."""
        self.is_tracking = False

        # Running cumulative distance (m)
        self.total_distance_m = 0.0
        # Next multiple of the log interval that triggers a record
        self.next_log_threshold_m = self.config.log_interval_m
        self.record_index = 0

        self.previous_point: Optional[AcceptedPoint] = None
        # Curvature triangle is (second_last_logged, last_logged, current)
        self.last_logged_point: Optional[AcceptedPoint] = None
        self.second_last_logged_point: Optional[AcceptedPoint] = None

        self.altitude_window: Deque[float] = altitude.new_window(
            self.config.altitude_window_size
        )
        self.polyline_points: Deque[Tuple[float, float]] = deque(
            maxlen=self.config.polyline_max_points or None
        )

        self.current_speed_kmh = 0.0
        self.current_altitude = 0.0

    def restore_from_records(self, records: Sequence[LogRecord]) -> None:
        """
        Resume counters from previously persisted records.

        The threshold is recomputed from the last stored total so that
        accumulation continues where the previous run stopped.

        Args:
            records: Stored records in insertion order.
        """
        if not records:
            return
        last = records[-1]
        self.record_index = last.index
        self.total_distance_m = last.total_distance_m
        self.next_log_threshold_m = self.total_distance_m + self.config.log_interval_m
        logger.info(
            "Resumed session at record %s, total %.1f m",
            self.record_index,
            self.total_distance_m,
        )

    def telemetry(self) -> Dict:
        """
        Snapshot of the live values read by the display layer.

        Returns:
            Dictionary with speed_kmh, altitude_m, total_distance_m,
            next_threshold_m, record_index, polyline_points and is_tracking.
        """
        return {
            "speed_kmh": utils.round_float(self.current_speed_kmh, 2),
            "altitude_m": utils.round_float(self.current_altitude, 2),
            "total_distance_m": utils.round_float(self.total_distance_m, 2),
            "next_threshold_m": utils.round_float(self.next_log_threshold_m, 2),
            "record_index": self.record_index,
            "polyline_points": len(self.polyline_points),
            "is_tracking": self.is_tracking,
        }
