import math

import pytest

from conftest import BASE_LAT, BASE_LON, destination, make_fix
from train_logger.models import FilterStatus
from train_logger.noise_filter import GATES, filter_fix


def test_gate_order() -> None:
    names = [gate.__name__ for gate in GATES]
    assert names == [
        "_validity_gate",
        "_accuracy_gate",
        "_speed_gate",
        "_jump_gate",
        "_min_movement_gate",
    ]


def test_poor_accuracy_is_noisy_and_leaves_state_untouched(session) -> None:
    outcome = filter_fix(make_fix(accuracy=25.0, speed=20.0), session)
    assert outcome.status is FilterStatus.REJECTED_NOISY
    assert outcome.reason == "accuracy"
    assert len(session.altitude_window) == 0
    assert session.current_speed_kmh == 0.0
    assert session.previous_point is None


def test_accuracy_at_limit_passes(session) -> None:
    assert filter_fix(make_fix(accuracy=20.0), session).accepted


@pytest.mark.parametrize("speed", [-1.0, 0.0, 0.5, math.nan])
def test_low_or_missing_speed_is_stationary(session, speed) -> None:
    outcome = filter_fix(make_fix(speed=speed, altitude=321.0), session)
    assert outcome.status is FilterStatus.REJECTED_STATIONARY
    assert session.current_speed_kmh == 0.0
    assert list(session.altitude_window) == [321.0]
    assert session.current_altitude == 321.0
    assert session.previous_point is None


def test_non_finite_coordinates_are_noisy(session) -> None:
    outcome = filter_fix(make_fix(lat=math.nan), session)
    assert outcome.status is FilterStatus.REJECTED_NOISY
    assert outcome.reason == "invalid"
    assert len(session.altitude_window) == 0


def test_out_of_range_latitude_is_noisy(session) -> None:
    assert filter_fix(make_fix(lat=91.0), session).reason == "invalid"


def test_first_accepted_fix_becomes_origin(session) -> None:
    outcome = filter_fix(make_fix(), session)
    assert outcome.status is FilterStatus.ACCEPTED
    assert outcome.reason == "origin"
    assert outcome.distance_m is None
    assert session.previous_point == outcome.point
    assert session.last_logged_point == outcome.point
    assert list(session.polyline_points) == [(BASE_LAT, BASE_LON)]


def test_speed_is_clamped(session) -> None:
    outcome = filter_fix(make_fix(speed=200.0), session)
    assert outcome.point.speed_ms == 83.0
    assert session.current_speed_kmh == pytest.approx(83.0 * 3.6)


def test_movement_is_measured_from_previous_point(session) -> None:
    filter_fix(make_fix(), session)
    lat, lon = destination(BASE_LAT, BASE_LON, 30.0)
    outcome = filter_fix(make_fix(lat, lon, seconds=1), session)
    assert outcome.reason == "movement"
    assert outcome.distance_m == pytest.approx(30.0, abs=1e-6)
    assert session.previous_point == outcome.point


def test_drift_does_not_move_previous_point(session) -> None:
    origin = filter_fix(make_fix(), session).point
    for i, azimuth in enumerate((0.0, 180.0, 90.0, 270.0), start=1):
        lat, lon = destination(BASE_LAT, BASE_LON, 3.0, azimuth)
        outcome = filter_fix(make_fix(lat, lon, seconds=i), session)
        assert outcome.reason == "drift"
        assert session.previous_point == origin


def test_small_drifts_cannot_accumulate(session) -> None:
    filter_fix(make_fix(), session)
    lat, lon = destination(BASE_LAT, BASE_LON, 4.0)
    assert filter_fix(make_fix(lat, lon, seconds=1), session).reason == "drift"
    # Measured from the origin, not from the rejected 4 m fix
    lat, lon = destination(BASE_LAT, BASE_LON, 6.0)
    outcome = filter_fix(make_fix(lat, lon, seconds=2), session)
    assert outcome.accepted
    assert outcome.distance_m == pytest.approx(6.0, abs=1e-6)


def test_jump_moves_previous_point_to_glitch(session) -> None:
    filter_fix(make_fix(), session)
    glitch_lat, glitch_lon = destination(BASE_LAT, BASE_LON, 600.0)
    outcome = filter_fix(make_fix(glitch_lat, glitch_lon, seconds=1), session)
    assert outcome.status is FilterStatus.REJECTED_NOISY
    assert outcome.reason == "jump"
    assert session.previous_point == outcome.point

    lat, lon = destination(glitch_lat, glitch_lon, 50.0)
    outcome = filter_fix(make_fix(lat, lon, seconds=2), session)
    assert outcome.accepted
    assert outcome.distance_m == pytest.approx(50.0, abs=1e-6)


def test_live_speed_updates_even_when_drift_rejected(session) -> None:
    filter_fix(make_fix(speed=15.0), session)
    lat, lon = destination(BASE_LAT, BASE_LON, 2.0)
    outcome = filter_fix(make_fix(lat, lon, speed=20.0, seconds=1), session)
    assert outcome.reason == "drift"
    assert session.current_speed_kmh == pytest.approx(72.0)
    assert len(session.altitude_window) == 2


def test_missing_altitude_does_not_reject_fix(session) -> None:
    filter_fix(make_fix(altitude=250.0), session)
    lat, lon = destination(BASE_LAT, BASE_LON, 30.0)
    outcome = filter_fix(make_fix(lat, lon, altitude=math.nan, seconds=1), session)
    assert outcome.accepted
    assert outcome.distance_m == pytest.approx(30.0, abs=1e-6)
    assert list(session.altitude_window) == [250.0]
    assert session.current_altitude == 250.0


def test_missing_altitude_while_stationary_skips_window(session) -> None:
    outcome = filter_fix(make_fix(speed=0.0, altitude=math.nan), session)
    assert outcome.status is FilterStatus.REJECTED_STATIONARY
    assert len(session.altitude_window) == 0
