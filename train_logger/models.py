"""
Data Models for Train Logger

This module defines the values that flow through the tracking pipeline: raw
GPS fixes, accepted points, noise-filter outcomes and the distance-indexed
log records handed to storage and export.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class RawFix:
    """
    A single position sample as delivered by the location source.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        altitude: Altitude in meters. Often unreliable; NaN when not reported.
        accuracy: Horizontal accuracy in meters.
        speed: Reported speed in m/s. Zero or negative means unavailable.
        timestamp: Fix time. Naive datetimes are read as UTC.
    """

    latitude: float
    longitude: float
    altitude: float
    accuracy: float
    speed: float
    timestamp: datetime


@dataclass(frozen=True)
class AcceptedPoint:
    """A fix that passed the accuracy and speed gates, with speed clamped."""

    latitude: float
    longitude: float
    altitude: float
    speed_ms: float
    accuracy: float
    timestamp: datetime

    @property
    def lat_lon(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


class FilterStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED_STATIONARY = "rejected_stationary"
    REJECTED_NOISY = "rejected_noisy"


@dataclass(frozen=True)
class FilterOutcome:
    """
    Result of running one fix through the noise filter.

    Attributes:
        status: Accepted, stationary or noisy.
        reason: Name of the gate that decided the outcome.
        point: Candidate point, when one was built.
        distance_m: Movement since the previous point. None when the accepted
            point became the session origin or no distance was measured.
    """

    status: FilterStatus
    reason: str
    point: Optional[AcceptedPoint] = None
    distance_m: Optional[float] = None

    @property
    def accepted(self) -> bool:
        return self.status is FilterStatus.ACCEPTED


@dataclass(frozen=True)
class LogRecord:
    """
    A record emitted each time cumulative distance crosses a log threshold.

    Nullable fields are None when the value is unavailable: elevation and
    grade on near-zero segments, curvature before three logged points exist.
    """

    index: int
    timestamp: str
    latitude: float
    longitude: float
    speed_kmh: float
    altitude_m: float
    segment_distance_m: float
    elevation_delta_m: Optional[float]
    grade_percent: Optional[float]
    total_distance_m: float
    curvature_percent: Optional[float] = None
    curve_radius_m: Optional[float] = None

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "LogRecord":
        """
        Rebuild a record from its dictionary form.

        Args:
            data: Dictionary produced by to_dict() (e.g. loaded from JSON).

        Returns:
            LogRecord instance.

        Raises:
            KeyError: If a required field is missing.
            TypeError, ValueError: If a field cannot be converted.
        """
        def optional(key: str) -> Optional[float]:
            value = data.get(key)
            return None if value is None else float(value)

        return cls(
            index=int(data["index"]),
            timestamp=str(data["timestamp"]),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            speed_kmh=float(data["speed_kmh"]),
            altitude_m=float(data["altitude_m"]),
            segment_distance_m=float(data["segment_distance_m"]),
            elevation_delta_m=optional("elevation_delta_m"),
            grade_percent=optional("grade_percent"),
            total_distance_m=float(data["total_distance_m"]),
            curvature_percent=optional("curvature_percent"),
            curve_radius_m=optional("curve_radius_m"),
        )
