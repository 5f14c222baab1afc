"""
Fix Loading for Train Logger

This module loads a recorded stream of GPS fixes from a CSV file so that it
can be replayed through the tracking pipeline exactly as a live location
source would deliver it.
"""

import logging
import numpy as np
import pandas as pd
from pathlib import Path
from typing import List, Union
from .errors import FixFormatError
from .models import RawFix

logger = logging.getLogger(__name__)

# Alternative column names accepted in fix files
COLUMN_ALIASES = {
    "lat": "latitude",
    "lon": "longitude",
    "lng": "longitude",
    "alt": "altitude",
    "altitude_m": "altitude",
    "accuracy_m": "accuracy",
    "horizontal_accuracy_m": "accuracy",
    "speed_mps": "speed",
}

REQUIRED_COLUMNS = ["latitude", "longitude", "altitude", "accuracy"]


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Lower-case column names and map known aliases to canonical names.

    Args:
        df: Raw DataFrame as read from disk.

    Returns:
        DataFrame with canonical column names.
    """
    df = df.rename(columns=lambda c: str(c).strip().lower())
    return df.rename(columns={k: v for k, v in COLUMN_ALIASES.items() if v not in df.columns})


def extract_timestamps(df: pd.DataFrame) -> pd.Series:
    """
    Build a UTC timestamp series from ``timestamp`` or ``timestamp_ms``.

    Prefers an ISO ``timestamp`` column, otherwise falls back to epoch
    milliseconds.

    Raises:
        FixFormatError: If neither column exists.
    """
    if "timestamp" in df.columns:
        return pd.to_datetime(df["timestamp"], utc=True, errors="coerce")
    if "timestamp_ms" in df.columns:
        return pd.to_datetime(df["timestamp_ms"], unit="ms", utc=True, errors="coerce")
    raise FixFormatError("Fix file needs a 'timestamp' or 'timestamp_ms' column")


def fixes_from_frame(df: pd.DataFrame) -> List[RawFix]:
    """
    Convert a fix DataFrame to RawFix values.

    Missing speed is treated as unavailable (-1). Rows without a parsable
    timestamp are dropped and the rest are sorted by time.

    Args:
        df: DataFrame with canonical column names.

    Returns:
        List of RawFix in chronological order.

    Raises:
        FixFormatError: If required columns are missing.
    """
    df = normalize_columns(df)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise FixFormatError(f"Fix file is missing columns: {', '.join(missing)}")

    df = df.copy()
    df["timestamp"] = extract_timestamps(df)
    if "speed" not in df.columns:
        df["speed"] = np.nan
    for column in REQUIRED_COLUMNS + ["speed"]:
        df[column] = pd.to_numeric(df[column], errors="coerce")
    df["speed"] = df["speed"].fillna(-1.0)

    # Clean and sort by timestamp
    before = len(df)
    df = df.dropna(subset=["timestamp"])
    if len(df) < before:
        logger.warning("Dropped %s fixes without a timestamp", before - len(df))
    df = df.sort_values("timestamp", kind="stable").reset_index(drop=True)

    return [
        RawFix(
            latitude=float(row.latitude),
            longitude=float(row.longitude),
            altitude=float(row.altitude),
            accuracy=float(row.accuracy),
            speed=float(row.speed),
            timestamp=row.timestamp.to_pydatetime(),
        )
        for row in df.itertuples(index=False)
    ]


def load_fixes_csv(file_path: Union[str, Path]) -> List[RawFix]:
    """
    Load a recorded fix stream from a CSV file.

    Args:
        file_path: Path to the CSV file.

    Returns:
        List of RawFix in chronological order.
    """
    df = pd.read_csv(Path(file_path))
    fixes = fixes_from_frame(df)
    logger.info("Loaded %s fixes from %s", len(fixes), file_path)
    return fixes
