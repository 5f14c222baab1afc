"""
Export Functions for Train Logger

This module exports log records to CSV for external analysis or sharing.
"""

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union
from . import utils
from .models import LogRecord

CSV_COLUMNS = [
    "index",
    "timestamp",
    "latitude",
    "longitude",
    "speed_kmh",
    "altitude_m",
    "segment_distance_m",
    "elevation_delta_m",
    "grade_percent",
    "curvature_percent",
    "curve_radius_m",
    "total_distance_m",
]


def record_to_row(record: LogRecord) -> List[str]:
    """
    Format one record as a CSV row.

    Nullable fields serialize as empty strings.

    Args:
        record: Record to format.

    Returns:
        List of cell values in CSV_COLUMNS order.
    """
    return [
        str(record.index),
        record.timestamp,
        repr(record.latitude),
        repr(record.longitude),
        f"{record.speed_kmh:.2f}",
        f"{record.altitude_m:.2f}",
        f"{record.segment_distance_m:.2f}",
        utils.format_optional(record.elevation_delta_m, 2),
        utils.format_optional(record.grade_percent, 3),
        utils.format_optional(record.curvature_percent, 4),
        utils.format_optional(record.curve_radius_m, 1),
        f"{record.total_distance_m:.2f}",
    ]


def build_csv(records: Sequence[LogRecord]) -> str:
    """
    Export log records to CSV format.

    Args:
        records: Records in insertion order.

    Returns:
        CSV string with a header row followed by one row per record.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    # Write header
    writer.writerow(CSV_COLUMNS)

    # Write data rows
    for record in records:
        writer.writerow(record_to_row(record))

    return buffer.getvalue()


def export_filename(now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"train_log_{stamp}.csv"


def export_csv(records: Sequence[LogRecord], directory: Union[str, Path],
               now: Optional[datetime] = None) -> Optional[Path]:
    """
    Write records to a timestamped CSV file.

    Args:
        records: Records to export.
        directory: Output directory, created if missing.
        now: Time used for the file name. Defaults to the current local time.

    Returns:
        Path of the written file, or None when there is nothing to export.
    """
    if not records:
        return None

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(now)
    path.write_text(build_csv(records), encoding="utf-8")
    return path
