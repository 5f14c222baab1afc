import pytest

from train_logger.geodesy import geodesic_distance_m, latlon_to_local_xy, M_PER_DEG_LAT


def test_distance_about_100m_apart() -> None:
    dist = geodesic_distance_m(41.2995, 69.2401, 41.3004, 69.2401)
    assert dist == pytest.approx(100.0, abs=10.0)


def test_distance_same_point_is_zero() -> None:
    assert geodesic_distance_m(41.2995, 69.2401, 41.2995, 69.2401) == 0.0


def test_distance_is_symmetric() -> None:
    a = (41.2995, 69.2401)
    b = (41.3050, 69.2533)
    assert geodesic_distance_m(*a, *b) == pytest.approx(geodesic_distance_m(*b, *a), abs=1e-6)


def test_distance_one_degree_of_latitude() -> None:
    # Meridian degree near the equator on WGS84
    assert geodesic_distance_m(0.0, 0.0, 1.0, 0.0) == pytest.approx(110574.4, abs=1.0)


def test_local_xy_origin_and_axes() -> None:
    xs, ys = latlon_to_local_xy([41.0, 41.001, 41.0], [69.0, 69.0, 69.001], 41.0, 69.0, 41.0)
    assert xs[0] == 0.0 and ys[0] == 0.0
    assert xs[1] == pytest.approx(0.0)
    assert ys[1] == pytest.approx(0.001 * M_PER_DEG_LAT)
    # Longitude shrinks with latitude
    assert 0.0 < xs[2] < ys[1]
    assert ys[2] == pytest.approx(0.0)
