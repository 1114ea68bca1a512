"""Data model classes for ski-area navigation.

Separates input data (what the geodata pipeline delivers) from the routable
graph and from the route handed to presentation code:
- PathPoint: Geometry atom (lon, lat, elevation)
- Difficulty: Ordered piste difficulty levels and filter parsing
- PisteFeature / LiftFeature / LiftStation: Input features
- Node / NodeKey / NodeKind: Routable points with deterministic IDs
- Edge / EdgeKind: Directed weighted traversal options
- NavGraph: Immutable graph with adjacency index and lookups
- Location / RouteStep / Route / PathResult: Path finder output
"""

from skiresort_navigator.model.difficulty import (
    Difficulty,
    format_difficulty_filter,
    parse_difficulty_filter,
)
from skiresort_navigator.model.edge import Edge, EdgeKind
from skiresort_navigator.model.features import LiftFeature, LiftStation, PisteFeature
from skiresort_navigator.model.nav_graph import NavGraph
from skiresort_navigator.model.node import FeatureType, Node, NodeKey, NodeKind
from skiresort_navigator.model.path_point import PathPoint
from skiresort_navigator.model.route import Location, PathResult, Route, RouteStep

__all__ = [
    "PathPoint",
    "Difficulty",
    "parse_difficulty_filter",
    "format_difficulty_filter",
    "PisteFeature",
    "LiftFeature",
    "LiftStation",
    "FeatureType",
    "Node",
    "NodeKey",
    "NodeKind",
    "Edge",
    "EdgeKind",
    "NavGraph",
    "Location",
    "PathResult",
    "RouteStep",
    "Route",
]
