"""Geodesic calculations on Earth's surface.

Provides the geographic helpers the routing engine needs:
- Distance calculation (Haversine formula)
- Polyline length accumulation
- Conversion to 3D Cartesian coordinates on the sphere
- Conversion between great-circle distance and straight chord length

All calculations use WGS84 spherical Earth approximation (R = 6,371 km).
Elevation never enters a distance: all lengths are horizontal.
"""

from math import atan2, cos, radians, sin, sqrt
from typing import Iterable, Sequence

from skiresort_navigator.constants import EARTH_RADIUS_M


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    All methods use WGS84 spherical Earth model (R = 6,371 km).
    Coordinates are in decimal degrees (WGS84).
    Distances are in meters.
    """

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Calculate great-circle distance between two points using Haversine formula.

        Args:
            lat1: Latitude of first point (decimal degrees)
            lon1: Longitude of first point (decimal degrees)
            lat2: Latitude of second point (decimal degrees)
            lon2: Longitude of second point (decimal degrees)

        Returns:
            Distance in meters.
        """
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def polyline_length_m(lon_lat_points: Sequence[Sequence[float]]) -> float:
        """Sum of great-circle distances between consecutive (lon, lat) points.

        Args:
            lon_lat_points: Points in GeoJSON order (lon, lat)

        Returns:
            Length in meters. 0.0 for fewer than 2 points.
        """
        total = 0.0
        for (lon1, lat1), (lon2, lat2) in zip(lon_lat_points, lon_lat_points[1:]):
            total += GeoCalculator.haversine_distance_m(lat1=lat1, lon1=lon1, lat2=lat2, lon2=lon2)
        return total

    @staticmethod
    def multi_polyline_length_m(segments: Iterable[Sequence[Sequence[float]]]) -> float:
        """Total length over several (lon, lat) polylines; gaps between them are not counted."""
        return sum(GeoCalculator.polyline_length_m(lon_lat_points=segment) for segment in segments)

    @staticmethod
    def to_cartesian(lat: float, lon: float) -> tuple[float, float, float]:
        """Project a point onto the sphere surface as (x, y, z) in meters.

        Straight-line (chord) distances between projected points grow
        monotonically with great-circle distance, which lets a Euclidean
        KD-tree answer great-circle radius queries.
        """
        lat_rad = radians(lat)
        lon_rad = radians(lon)
        return (
            EARTH_RADIUS_M * cos(lat_rad) * cos(lon_rad),
            EARTH_RADIUS_M * cos(lat_rad) * sin(lon_rad),
            EARTH_RADIUS_M * sin(lat_rad),
        )

    @staticmethod
    def arc_to_chord_m(arc_m: float) -> float:
        """Chord length subtending a great-circle arc of the given length."""
        return 2 * EARTH_RADIUS_M * sin(arc_m / (2 * EARTH_RADIUS_M))
