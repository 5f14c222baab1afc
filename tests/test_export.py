import csv
import io
from datetime import datetime

from train_logger import CSV_COLUMNS, LogRecord, build_csv, export_csv
from train_logger.export import export_filename, record_to_row


def _record(**overrides):
    values = dict(
        index=3,
        timestamp="2024-05-01T08:01:00.000Z",
        latitude=41.3022,
        longitude=69.2401,
        speed_kmh=54.0,
        altitude_m=452.456,
        segment_distance_m=100.123,
        elevation_delta_m=4.1,
        grade_percent=4.10256,
        total_distance_m=300.0,
        curvature_percent=0.123456,
        curve_radius_m=810.04,
    )
    values.update(overrides)
    return LogRecord(**values)


def test_header_order() -> None:
    text = build_csv([])
    assert text == ",".join(CSV_COLUMNS) + "\n"
    assert CSV_COLUMNS[-1] == "total_distance_m"
    assert CSV_COLUMNS.index("curvature_percent") < CSV_COLUMNS.index("curve_radius_m")


def test_row_formatting() -> None:
    row = dict(zip(CSV_COLUMNS, record_to_row(_record())))
    assert row["index"] == "3"
    assert row["latitude"] == "41.3022"
    assert row["speed_kmh"] == "54.00"
    assert row["altitude_m"] == "452.46"
    assert row["segment_distance_m"] == "100.12"
    assert row["elevation_delta_m"] == "4.10"
    assert row["grade_percent"] == "4.103"
    assert row["curvature_percent"] == "0.1235"
    assert row["curve_radius_m"] == "810.0"
    assert row["total_distance_m"] == "300.00"


def test_missing_values_are_empty_cells() -> None:
    record = _record(elevation_delta_m=None, grade_percent=None, curvature_percent=None, curve_radius_m=None)
    rows = list(csv.DictReader(io.StringIO(build_csv([record]))))
    assert len(rows) == 1
    for column in ("elevation_delta_m", "grade_percent", "curvature_percent", "curve_radius_m"):
        assert rows[0][column] == ""


def test_export_filename() -> None:
    assert export_filename(datetime(2024, 1, 2, 3, 4, 5)) == "train_log_20240102_030405.csv"


def test_export_csv_writes_file(tmp_path) -> None:
    out_dir = tmp_path / "exports"
    path = export_csv([_record(index=1), _record(index=2)], out_dir, now=datetime(2024, 1, 2, 3, 4, 5))
    assert path == out_dir / "train_log_20240102_030405.csv"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert lines[1].startswith("1,")


def test_export_csv_without_records(tmp_path) -> None:
    assert export_csv([], tmp_path / "exports") is None
    assert not (tmp_path / "exports").exists()
