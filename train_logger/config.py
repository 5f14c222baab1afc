"""
Tracking Configuration for Train Logger

This module bundles the pipeline tuning constants into a single immutable
configuration object. Every value can be overridden through environment
variables prefixed with ``TRAIN_LOGGER_`` (optionally loaded from a local
``.env`` by the entry points).
"""

import os
from dataclasses import dataclass
from typing import Optional, Mapping
from . import constants
from . import utils


def _env_float(env: Mapping[str, str], key: str, default: float,
               allow_zero: bool = True) -> float:
    value = env.get(constants.ENV_PREFIX + key)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    # nan, inf and negative distances or speeds are never usable
    if not utils.is_finite(parsed) or parsed < 0 or (parsed == 0 and not allow_zero):
        return default
    return parsed


def _env_int(env: Mapping[str, str], key: str, default: int,
             allow_zero: bool = True) -> int:
    value = env.get(constants.ENV_PREFIX + key)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    if parsed < 0 or (parsed == 0 and not allow_zero):
        return default
    return parsed


@dataclass(frozen=True)
class TrackingConfig:
    """
    Tuning parameters for the noise filter, threshold engine and decimator.

    Attributes:
        log_interval_m: Distance between emitted log records.
        max_accuracy_m: Fixes reporting a worse horizontal accuracy are dropped.
        min_speed_ms: Below this speed the device is considered stationary.
        max_speed_ms: Reported speeds are clamped to this ceiling.
        max_jump_m: Larger point-to-point moves are treated as teleport glitches.
        min_movement_m: Smaller point-to-point moves are treated as drift.
        altitude_window_size: Number of raw altitudes kept for the median.
        polyline_decimation_m: Minimum spacing between display polyline vertices.
        polyline_max_points: Cap on retained polyline vertices (oldest dropped).

    Raises:
        ValueError: If the log interval is not a positive number, the window
            is empty or the polyline cap is negative.
    """

    log_interval_m: float = constants.LOG_INTERVAL_M
    max_accuracy_m: float = constants.MAX_ACCURACY_M
    min_speed_ms: float = constants.MIN_SPEED_MS
    max_speed_ms: float = constants.MAX_SPEED_MS
    max_jump_m: float = constants.MAX_JUMP_M
    min_movement_m: float = constants.MIN_MOVEMENT_M
    altitude_window_size: int = constants.ALTITUDE_WINDOW_SIZE
    polyline_decimation_m: float = constants.POLYLINE_DECIMATION_M
    polyline_max_points: int = constants.POLYLINE_MAX_POINTS

    def __post_init__(self):
        if not utils.is_finite(self.log_interval_m) or self.log_interval_m <= 0:
            raise ValueError(f"log_interval_m must be positive, got {self.log_interval_m}")
        if self.altitude_window_size < 1:
            raise ValueError(f"altitude_window_size must be >= 1, got {self.altitude_window_size}")
        if self.polyline_max_points < 0:
            raise ValueError(f"polyline_max_points must be >= 0, got {self.polyline_max_points}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "TrackingConfig":
        """
        Build a configuration from ``TRAIN_LOGGER_*`` environment variables.

        Unset, unparsable, non-finite or out-of-range variables fall back to
        the defaults. Zero is rejected where it would stall the pipeline
        (log interval, window size, accuracy, speed and jump limits).

        Args:
            env: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            TrackingConfig with overrides applied.
        """
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            log_interval_m=_env_float(
                env, "LOG_INTERVAL_M", defaults.log_interval_m, allow_zero=False
            ),
            max_accuracy_m=_env_float(
                env, "MAX_ACCURACY_M", defaults.max_accuracy_m, allow_zero=False
            ),
            min_speed_ms=_env_float(env, "MIN_SPEED_MS", defaults.min_speed_ms),
            max_speed_ms=_env_float(
                env, "MAX_SPEED_MS", defaults.max_speed_ms, allow_zero=False
            ),
            max_jump_m=_env_float(
                env, "MAX_JUMP_M", defaults.max_jump_m, allow_zero=False
            ),
            min_movement_m=_env_float(env, "MIN_MOVEMENT_M", defaults.min_movement_m),
            altitude_window_size=_env_int(
                env, "ALTITUDE_WINDOW_SIZE", defaults.altitude_window_size, allow_zero=False
            ),
            polyline_decimation_m=_env_float(
                env, "POLYLINE_DECIMATION_M", defaults.polyline_decimation_m
            ),
            polyline_max_points=_env_int(
                env, "POLYLINE_MAX_POINTS", defaults.polyline_max_points
            ),
        )


DEFAULT_CONFIG = TrackingConfig()
