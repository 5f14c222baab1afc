"""
Noise Filter for Train Logger

This module decides whether a raw GPS fix may affect the accumulated session
state. Fixes pass through an ordered tuple of gates; the first gate that
rejects a fix ends the pipeline.

Gate order:
    1. validity     - non-finite or out-of-range position or accuracy
    2. accuracy     - horizontal accuracy worse than the configured limit
    3. speed        - unavailable or low speed means stationary
    4. jump         - implausibly large move from the previous point
    5. min-movement - drift smaller than the movement threshold

A jump rejection moves previous_point to the candidate so one glitch does not
poison later comparisons. A drift rejection leaves previous_point alone so
successive small drifts cannot add up past the movement threshold.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
from . import altitude
from . import geodesy
from . import utils
from .constants import MPS_TO_KMH
from .models import AcceptedPoint, FilterOutcome, FilterStatus, RawFix
from .session import TrackingSession

logger = logging.getLogger(__name__)


@dataclass
class _Candidate:
    raw: RawFix
    point: Optional[AcceptedPoint] = None
    distance_m: Optional[float] = None


@dataclass(frozen=True)
class GateRejection:
    """
    Attributes:
        status: Outcome status reported for the rejected fix.
        reason: Gate name.
        update_previous: Move session.previous_point to the candidate.
    """

    status: FilterStatus
    reason: str
    update_previous: bool = False


Gate = Callable[[_Candidate, TrackingSession], Optional[GateRejection]]


def _push_altitude(session: TrackingSession, value: float) -> None:
    # Missing altitude leaves the window and live value untouched
    if not utils.is_finite(value):
        return
    altitude.push_altitude(session.altitude_window, value)
    session.current_altitude = altitude.smoothed_altitude(session.altitude_window)


def _validity_gate(candidate: _Candidate, session: TrackingSession) -> Optional[GateRejection]:
    raw = candidate.raw
    if not all(utils.is_finite(v) for v in (raw.latitude, raw.longitude, raw.accuracy)):
        return GateRejection(FilterStatus.REJECTED_NOISY, "invalid")
    if abs(raw.latitude) > 90.0 or abs(raw.longitude) > 180.0:
        return GateRejection(FilterStatus.REJECTED_NOISY, "invalid")
    return None


def _accuracy_gate(candidate: _Candidate, session: TrackingSession) -> Optional[GateRejection]:
    if candidate.raw.accuracy > session.config.max_accuracy_m:
        return GateRejection(FilterStatus.REJECTED_NOISY, "accuracy")
    return None


def _speed_gate(candidate: _Candidate, session: TrackingSession) -> Optional[GateRejection]:
    config = session.config
    raw = candidate.raw

    # Speed <= 0 or NaN means the device did not report one
    speed_ms = raw.speed if utils.is_finite(raw.speed) and raw.speed > 0 else 0.0

    if speed_ms < config.min_speed_ms:
        # Keep altitude fresh while stopped
        session.current_speed_kmh = 0.0
        _push_altitude(session, raw.altitude)
        return GateRejection(FilterStatus.REJECTED_STATIONARY, "stationary")

    speed_ms = min(max(speed_ms, 0.0), config.max_speed_ms)
    candidate.point = AcceptedPoint(
        latitude=raw.latitude,
        longitude=raw.longitude,
        altitude=raw.altitude,
        speed_ms=speed_ms,
        accuracy=raw.accuracy,
        timestamp=raw.timestamp,
    )

    # Live values update regardless of the movement gates below
    session.current_speed_kmh = speed_ms * MPS_TO_KMH
    _push_altitude(session, raw.altitude)
    return None


def _jump_gate(candidate: _Candidate, session: TrackingSession) -> Optional[GateRejection]:
    previous = session.previous_point
    if previous is None:
        return None

    point = candidate.point
    candidate.distance_m = geodesy.geodesic_distance_m(
        previous.latitude, previous.longitude, point.latitude, point.longitude
    )
    if candidate.distance_m > session.config.max_jump_m:
        return GateRejection(FilterStatus.REJECTED_NOISY, "jump", update_previous=True)
    return None


def _min_movement_gate(candidate: _Candidate, session: TrackingSession) -> Optional[GateRejection]:
    if candidate.distance_m is None:
        return None
    if candidate.distance_m < session.config.min_movement_m:
        return GateRejection(FilterStatus.REJECTED_NOISY, "drift")
    return None


GATES: Tuple[Gate, ...] = (
    _validity_gate,
    _accuracy_gate,
    _speed_gate,
    _jump_gate,
    _min_movement_gate,
)


def filter_fix(raw: RawFix, session: TrackingSession) -> FilterOutcome:
    """
    Run a raw fix through the gate pipeline.

    Live speed and altitude are updated by the speed gate. On acceptance
    previous_point is moved to the new point; the very first accepted point
    also becomes the session origin (last logged point and first polyline
    vertex) without producing any movement.

    Args:
        raw: Fix from the location source.
        session: Session state, mutated in place.

    Returns:
        FilterOutcome. Accepted outcomes carry the point and, unless the
        point became the origin, the distance moved since previous_point.
    """
    candidate = _Candidate(raw=raw)

    for gate in GATES:
        rejection = gate(candidate, session)
        if rejection is None:
            continue
        if rejection.update_previous:
            session.previous_point = candidate.point
        logger.debug(
            "Rejected fix at (%s, %s): %s (distance=%s)",
            raw.latitude,
            raw.longitude,
            rejection.reason,
            candidate.distance_m,
        )
        return FilterOutcome(
            status=rejection.status,
            reason=rejection.reason,
            point=candidate.point,
            distance_m=candidate.distance_m,
        )

    point = candidate.point
    if session.previous_point is None:
        session.last_logged_point = point
        session.polyline_points.append(point.lat_lon)
        session.previous_point = point
        logger.debug("Session origin set at (%s, %s)", point.latitude, point.longitude)
        return FilterOutcome(status=FilterStatus.ACCEPTED, reason="origin", point=point)

    session.previous_point = point
    return FilterOutcome(
        status=FilterStatus.ACCEPTED,
        reason="movement",
        point=point,
        distance_m=candidate.distance_m,
    )
