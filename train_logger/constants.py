"""
Constants for Train Logger

This module defines the tuning constants of the tracking pipeline and the
default paths used by the storage and export collaborators.
"""

from pathlib import Path

# Data folder is one level up from train_logger/
DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_RECORDS_FILE = DATA_DIR / "train_log_records.json"
EXPORT_DIR = DATA_DIR / "exports"

# A record is emitted every time cumulative distance crosses a multiple of this
LOG_INTERVAL_M = 100.0

# Noise filter gates
MAX_ACCURACY_M = 20.0
MIN_SPEED_MS = 1.0
MAX_SPEED_MS = 83.0  # ~300 km/h
MAX_JUMP_M = 500.0
MIN_MOVEMENT_M = 5.0

# Median window for altitude smoothing
ALTITUDE_WINDOW_SIZE = 5

# Display polyline
POLYLINE_DECIMATION_M = 10.0
POLYLINE_MAX_POINTS = 50_000

MPS_TO_KMH = 3.6

# Environment variable prefix for TrackingConfig overrides
ENV_PREFIX = "TRAIN_LOGGER_"
