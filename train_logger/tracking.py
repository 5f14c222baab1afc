"""
Tracking Service for Train Logger

This module orchestrates the per-fix pipeline: noise filter, distance
accumulation, threshold crossing, record building and path decimation.

Each call to ``TrackingService.process`` handles one fix to completion and
returns the records it produced. Persisting those records is the caller's
job; the service performs no I/O.
"""

import logging
from typing import List, Optional
from . import altitude
from . import curvature
from . import decimation
from . import geodesy
from . import metrics
from . import noise_filter
from . import utils
from .config import TrackingConfig
from .constants import MPS_TO_KMH
from .models import AcceptedPoint, FilterOutcome, LogRecord, RawFix
from .session import TrackingSession

logger = logging.getLogger(__name__)


class TrackingService:
    """
    Distance accumulator and threshold engine over a TrackingSession.

    Args:
        session: Session state owned by this service while processing.
    """

    def __init__(self, session: TrackingSession):
        self.session = session
        self.last_outcome: Optional[FilterOutcome] = None

    @property
    def config(self) -> TrackingConfig:
        return self.session.config

    def process(self, raw: RawFix) -> List[LogRecord]:
        """
        Process one raw fix.

        An accepted movement is added to the running total. Every log
        threshold the total reaches emits one record; a single large move can
        cross several thresholds, in which case every record uses the same
        current point and carries the crossed threshold as its total.

        Args:
            raw: Fix from the location source.

        Returns:
            Records emitted by this fix (possibly empty).
        """
        outcome = noise_filter.filter_fix(raw, self.session)
        self.last_outcome = outcome
        if not outcome.accepted or outcome.distance_m is None:
            return []

        session = self.session
        point = outcome.point
        records = []

        session.total_distance_m += outcome.distance_m

        while metrics.has_crossed_threshold(session.total_distance_m, session.next_log_threshold_m):
            session.record_index += 1
            record = self._build_record(point)
            records.append(record)
            logger.info(
                "Record %s at %.0f m (grade=%s, curvature=%s)",
                record.index,
                record.total_distance_m,
                record.grade_percent,
                record.curvature_percent,
            )

            session.second_last_logged_point = session.last_logged_point
            session.last_logged_point = point
            session.next_log_threshold_m += self.config.log_interval_m

        decimation.maybe_append(session.polyline_points, point, self.config.polyline_decimation_m)
        return records

    def _build_record(self, current: AcceptedPoint) -> LogRecord:
        session = self.session
        smoothed = altitude.smoothed_altitude(session.altitude_window)
        last = session.last_logged_point

        elevation_delta_m: Optional[float] = None
        grade_percent: Optional[float] = None
        segment_distance_m = self.config.log_interval_m

        if last is not None:
            segment_distance_m = geodesy.geodesic_distance_m(
                last.latitude, last.longitude, current.latitude, current.longitude
            )
            elevation_delta_m = metrics.elevation_delta(
                smoothed if session.altitude_window else None,
                last.altitude,
                segment_distance_m,
            )
            if elevation_delta_m is not None:
                grade_percent = metrics.compute_grade_percent(elevation_delta_m, segment_distance_m)

        curvature_percent: Optional[float] = None
        curve_radius_m: Optional[float] = None
        second_last = session.second_last_logged_point
        if second_last is not None and last is not None:
            result = curvature.compute_menger_curvature(
                second_last.latitude, second_last.longitude,
                last.latitude, last.longitude,
                current.latitude, current.longitude,
            )
            curvature_percent = result.curvature_percent
            curve_radius_m = result.radius_m

        return LogRecord(
            index=session.record_index,
            timestamp=utils.to_iso_utc(current.timestamp),
            latitude=current.latitude,
            longitude=current.longitude,
            speed_kmh=current.speed_ms * MPS_TO_KMH,
            altitude_m=smoothed,
            segment_distance_m=segment_distance_m,
            elevation_delta_m=elevation_delta_m,
            grade_percent=grade_percent,
            # The threshold just crossed, not the running total
            total_distance_m=session.next_log_threshold_m - self.config.log_interval_m,
            curvature_percent=curvature_percent,
            curve_radius_m=curve_radius_m,
        )
