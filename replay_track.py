"""
Replay a recorded GPS fix stream through the Train Logger pipeline.

This script feeds every fix of a CSV file through the tracking service, as a
live location source would, then prints a summary and writes the resulting
100 m log records to CSV.

Usage:
    python3 replay_track.py --fixes "data/run.csv"
    python3 replay_track.py --fixes "data/run.csv" --out-dir "exports" --log-level DEBUG
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import List, Tuple

from dotenv import load_dotenv

import train_logger
from train_logger import constants


def replay(fixes: List[train_logger.RawFix],
           config: train_logger.TrackingConfig) -> Tuple[train_logger.TrackingSession,
                                                         List[train_logger.LogRecord],
                                                         Counter]:
    """
    Run fixes through a fresh session.

    Args:
        fixes: Fixes in chronological order.
        config: Pipeline configuration.

    Returns:
        Tuple of (final session, emitted records, count of filter outcomes by
        gate reason).
    """
    session = train_logger.TrackingSession(config)
    service = train_logger.TrackingService(session)
    records: List[train_logger.LogRecord] = []
    reasons: Counter = Counter()

    for fix in fixes:
        records.extend(service.process(fix))
        reasons[service.last_outcome.reason] += 1

    return session, records, reasons


def print_summary(fixes_path: Path, session: train_logger.TrackingSession,
                  records: List[train_logger.LogRecord], reasons: Counter) -> None:
    """
    Print a formatted summary of a replayed run.

    Args:
        fixes_path: Path of the replayed fix file.
        session: Session after the last fix.
        records: Emitted records.
        reasons: Filter outcome counts by gate reason.
    """
    print(f"\n{'='*70}")
    print(f"REPLAY SUMMARY: {fixes_path.name}")
    print(f"{'='*70}")
    print(f"{'Fixes replayed':<28}{sum(reasons.values()):>12}")
    print(f"{'Records emitted':<28}{len(records):>12}")
    print(f"{'Total distance [m]':<28}{session.total_distance_m:>12.1f}")
    print(f"{'Next threshold [m]':<28}{session.next_log_threshold_m:>12.1f}")
    print(f"{'Polyline vertices':<28}{len(session.polyline_points):>12}")
    for reason, count in sorted(reasons.items()):
        print(f"  {'Filter: ' + reason:<26}{count:>12}")

    grades = [r.grade_percent for r in records if r.grade_percent is not None]
    if grades:
        print(f"{'Max |grade| [%]':<28}{max(abs(g) for g in grades):>12.3f}")
    radii = [r.curve_radius_m for r in records if r.curve_radius_m is not None]
    if radii:
        print(f"{'Tightest radius [m]':<28}{min(radii):>12.1f}")
    print(f"{'='*70}\n")


def main():
    parser = argparse.ArgumentParser(
        description="Replay a GPS fix CSV through the Train Logger pipeline"
    )
    parser.add_argument(
        "--fixes",
        type=str,
        required=True,
        help="Path to the fix CSV (latitude, longitude, altitude, accuracy, speed, timestamp)"
    )
    parser.add_argument(
        "--out-dir",
        type=str,
        default=str(constants.EXPORT_DIR),
        help=f"Output directory for the record CSV (default: {constants.EXPORT_DIR})"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    fixes_path = Path(args.fixes)
    if not fixes_path.exists():
        print(f"Error: Fix file not found: {fixes_path}")
        sys.exit(1)

    try:
        fixes = train_logger.load_fixes_csv(fixes_path)
    except train_logger.FixFormatError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    config = train_logger.TrackingConfig.from_env()
    session, records, reasons = replay(fixes, config)

    print_summary(fixes_path, session, records, reasons)

    out_path = train_logger.export_csv(records, Path(args.out_dir))
    if out_path is None:
        print("No records emitted; nothing exported.")
    else:
        print(f"Saved record CSV to: {out_path}")


if __name__ == "__main__":
    main()
