"""PathPoint - The fundamental geometry atom for ski-area routing.

A PathPoint represents a single GPS coordinate with elevation.
It is the single source of truth for location of every graph node.

Upstream feature data uses (lat, lon, elevation) triples for points and
(lon, lat) pairs for line geometry; PathPoint converts between both.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from skiresort_navigator.core.geo_calculator import GeoCalculator


@dataclass(frozen=True)
class PathPoint:
    """A point with GPS coordinates and elevation.

    Attributes:
        lon: Longitude in decimal degrees (WGS84)
        lat: Latitude in decimal degrees (WGS84)
        elevation: Elevation in meters above sea level

    Example:
        point = PathPoint(lon=10.99, lat=46.90, elevation=2200.0)
    """

    lon: float
    lat: float
    elevation: float

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if np.isnan(self.elevation):
            raise ValueError(f"PathPoint cannot have NaN elevation at ({self.lon}, {self.lat})")

    @classmethod
    def from_lat_lon_elevation(cls, triple: Sequence[float]) -> "PathPoint":
        """Create from a (lat, lon, elevation) triple."""
        lat, lon, elevation = triple
        return cls(lon=float(lon), lat=float(lat), elevation=float(elevation))

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON order."""
        return (self.lon, self.lat)

    def as_lat_lon_elevation(self) -> tuple[float, float, float]:
        """Return (lat, lon, elevation) triple - the feature/location order."""
        return (self.lat, self.lon, self.elevation)

    def distance_to(self, other: "PathPoint") -> float:
        """Calculate haversine distance to another point in meters.

        Args:
            other: Another PathPoint to measure distance to

        Returns:
            Horizontal distance in meters using great-circle calculation.
        """
        return GeoCalculator.haversine_distance_m(
            lat1=self.lat,
            lon1=self.lon,
            lat2=other.lat,
            lon2=other.lon,
        )

    def __repr__(self) -> str:
        return f"PathPoint(lon={self.lon:.5f}, lat={self.lat:.5f}, elev={self.elevation:.1f}m)"
