"""
Train Logger

This package ingests a noisy stream of GPS fixes from a moving train and
derives a distance-indexed log: one record every 100 m carrying speed,
smoothed altitude, grade and local path curvature.

The package is split into one module per pipeline stage; this file re-exports
the public API.
"""

# Import configuration
from .config import TrackingConfig, DEFAULT_CONFIG

# Import data models
from .models import (
    RawFix,
    AcceptedPoint,
    FilterStatus,
    FilterOutcome,
    LogRecord,
)

# Import errors
from .errors import (
    TrainLoggerError,
    RecordStoreError,
    FixFormatError,
)

# Import geodesy functions
from .geodesy import (
    geodesic_distance_m,
    latlon_to_local_xy,
)

# Import pipeline stages
from .altitude import push_altitude, smoothed_altitude
from .metrics import (
    compute_grade_percent,
    has_crossed_threshold,
    elevation_delta,
)
from .curvature import CurvatureResult, compute_menger_curvature
from .decimation import maybe_append, polyline_to_geojson
from .noise_filter import filter_fix
from .session import TrackingSession
from .tracking import TrackingService

# Import collaborators
from .storage import RecordStore
from .export import CSV_COLUMNS, build_csv, export_csv
from .data_loading import load_fixes_csv
from .controller import TrackingController

__all__ = [
    # Configuration
    "TrackingConfig",
    "DEFAULT_CONFIG",
    # Models
    "RawFix",
    "AcceptedPoint",
    "FilterStatus",
    "FilterOutcome",
    "LogRecord",
    # Errors
    "TrainLoggerError",
    "RecordStoreError",
    "FixFormatError",
    # Geodesy
    "geodesic_distance_m",
    "latlon_to_local_xy",
    # Pipeline
    "push_altitude",
    "smoothed_altitude",
    "compute_grade_percent",
    "has_crossed_threshold",
    "elevation_delta",
    "CurvatureResult",
    "compute_menger_curvature",
    "maybe_append",
    "polyline_to_geojson",
    "filter_fix",
    "TrackingSession",
    "TrackingService",
    # Collaborators
    "RecordStore",
    "CSV_COLUMNS",
    "build_csv",
    "export_csv",
    "load_fixes_csv",
    "TrackingController",
]
