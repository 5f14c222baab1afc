import pytest

from train_logger.metrics import compute_grade_percent, elevation_delta, has_crossed_threshold


@pytest.mark.parametrize(
    "delta, segment, expected",
    [
        (0.0, 100.0, 0.0),
        (6.0, 100.0, 6.0),
        (-3.0, 100.0, -3.0),
        (4.0, 97.5, 4.1026),
    ],
)
def test_grade_percent(delta, segment, expected) -> None:
    assert compute_grade_percent(delta, segment) == pytest.approx(expected, abs=1e-4)


@pytest.mark.parametrize("segment", [0.0, -5.0])
def test_grade_non_positive_segment_is_zero(segment) -> None:
    assert compute_grade_percent(5.0, segment) == 0.0


def test_threshold_exactly_reached() -> None:
    assert has_crossed_threshold(100.0, 100.0)


def test_threshold_just_below() -> None:
    assert not has_crossed_threshold(99.9, 100.0)


def test_multi_threshold_jump_crosses_two_boundaries() -> None:
    total = 50.0
    next_threshold = 100.0
    crossings = 0
    total += 250.0
    while has_crossed_threshold(total, next_threshold):
        crossings += 1
        next_threshold += 100.0
    assert crossings == 2
    assert next_threshold == 300.0


def test_elevation_delta_requires_segment_over_one_metre() -> None:
    assert elevation_delta(105.0, 100.0, 1.0) is None
    assert elevation_delta(105.0, 100.0, 0.0) is None
    assert elevation_delta(105.0, 100.0, 1.5) == 5.0


def test_elevation_delta_unknown_altitude() -> None:
    assert elevation_delta(None, 100.0, 50.0) is None
    assert elevation_delta(105.0, float("nan"), 50.0) is None
