"""
Path Decimation and GeoJSON Conversion for Train Logger

This module maintains the simplified display polyline, independent of the
100 m logging thresholds, and converts it to GeoJSON for map rendering.
"""

from typing import Deque, Dict, Iterable, Tuple
from . import geodesy
from .models import AcceptedPoint


def maybe_append(polyline: Deque[Tuple[float, float]], point: AcceptedPoint,
                 decimation_m: float) -> bool:
    """
    Append a point to the polyline if it is far enough from the last vertex.

    The first point is always appended.

    Args:
        polyline: Display vertices as (lat, lon) tuples.
        point: Newly accepted point.
        decimation_m: Minimum distance from the last vertex in meters.

    Returns:
        True if the point was appended.
    """
    if not polyline:
        polyline.append(point.lat_lon)
        return True

    last_lat, last_lon = polyline[-1]
    dist = geodesy.geodesic_distance_m(last_lat, last_lon, point.latitude, point.longitude)
    if dist >= decimation_m:
        polyline.append(point.lat_lon)
        return True
    return False


def polyline_to_geojson(points: Iterable[Tuple[float, float]]) -> Dict:
    """
    Convert polyline vertices to a GeoJSON FeatureCollection.

    Creates a LineString feature representing the travelled path and a Point
    feature marking where tracking started.

    Args:
        points: Vertices as (lat, lon) tuples.

    Returns:
        GeoJSON FeatureCollection. Empty when there are no vertices; the
        LineString is omitted while only a single vertex exists.
    """
    coordinates = [[lon, lat] for lat, lon in points]

    if not coordinates:
        return {"type": "FeatureCollection", "features": []}

    features = []
    if len(coordinates) > 1:
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": coordinates,
            },
            "properties": {
                "vertexCount": len(coordinates),
            },
        })

    features.append({
        "type": "Feature",
        "geometry": {
            "type": "Point",
            "coordinates": coordinates[0],
        },
        "properties": {"marker": "start"},
    })

    return {
        "type": "FeatureCollection",
        "features": features,
    }
