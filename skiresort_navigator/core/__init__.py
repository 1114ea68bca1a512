"""Core foundation classes for geodesic calculations and proximity search.

This module provides the mathematical backbone for ski-area routing:
- GeoCalculator: Geodesic calculations (distances, polyline lengths, sphere projection)
- NodeProximityIndex: Pairwise radius search (pairwise scan or SciPy KD-tree)
"""

from skiresort_navigator.core.geo_calculator import GeoCalculator
from skiresort_navigator.core.spatial_index import NodeProximityIndex

__all__ = [
    "GeoCalculator",
    "NodeProximityIndex",
]
