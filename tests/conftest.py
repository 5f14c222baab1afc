"""Global pytest fixtures & helpers.

Adds project root to path and provides fix factories so tracking tests can
lay out tracks by distance and bearing instead of raw coordinates.
"""
from __future__ import annotations

import math
import os
import sys
from datetime import datetime, timedelta, timezone

import pytest
from pyproj import Geod

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from train_logger import RawFix, TrackingConfig, TrackingSession, TrackingService
from train_logger.geodesy import M_PER_DEG_LAT, M_PER_DEG_LON_EQUATOR

GEOD = Geod(ellps="WGS84")

BASE_LAT = 41.2995
BASE_LON = 69.2401
START_TIME = datetime(2024, 5, 1, 8, 0, 0, tzinfo=timezone.utc)


# --- Factory helpers -------------------------------------------------
def destination(lat, lon, distance_m, azimuth_deg=0.0):
    """Point reached from (lat, lon) after distance_m along azimuth_deg."""
    lon2, lat2, _ = GEOD.fwd(lon, lat, azimuth_deg, distance_m)
    return lat2, lon2


def make_fix(lat=BASE_LAT, lon=BASE_LON, speed=15.0, accuracy=5.0, altitude=100.0, seconds=0):
    return RawFix(
        latitude=lat,
        longitude=lon,
        altitude=altitude,
        accuracy=accuracy,
        speed=speed,
        timestamp=START_TIME + timedelta(seconds=seconds),
    )


def straight_track(step_m, steps, azimuth_deg=0.0, speed=15.0, altitude=100.0, climb_per_m=0.0):
    """Origin fix followed by ``steps`` fixes spaced ``step_m`` apart."""
    fixes = [make_fix(speed=speed, altitude=altitude)]
    lat, lon = BASE_LAT, BASE_LON
    for i in range(1, steps + 1):
        lat, lon = destination(lat, lon, step_m, azimuth_deg)
        fixes.append(make_fix(lat, lon, speed=speed, altitude=altitude + climb_per_m * step_m * i, seconds=i))
    return fixes


def circle_point(center_lat, center_lon, radius_m, angle_deg):
    """Point on a circle laid out with the equirectangular scale factors."""
    rad = math.radians(angle_deg)
    m_per_deg_lon = M_PER_DEG_LON_EQUATOR * math.cos(math.radians(center_lat))
    return (
        center_lat + radius_m * math.cos(rad) / M_PER_DEG_LAT,
        center_lon + radius_m * math.sin(rad) / m_per_deg_lon,
    )


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def session():
    return TrackingSession(TrackingConfig())


@pytest.fixture
def service(session):
    return TrackingService(session)


@pytest.fixture
def run_fixes(service):
    def _run(fixes):
        records = []
        for fix in fixes:
            records.extend(service.process(fix))
        return records
    return _run
