"""Route - Output of the path finder.

PathResult is the raw search result (node IDs, edges, cost). Route is the
rider-facing summary built from it: visible steps (pistes and lifts only),
distance and elevation totals, a time estimate, and the hardest piste
difficulty encountered.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from skiresort_navigator.constants import RouteConfig
from skiresort_navigator.model.difficulty import Difficulty
from skiresort_navigator.model.edge import Edge
from skiresort_navigator.model.node import Node

LatLonElevation = tuple[float, float, float]


@dataclass(frozen=True)
class Location:
    """A selectable route endpoint.

    Attributes:
        id: Node ID
        name: Display name
        kind: Node kind value (piste_top, piste_bottom, lift_station, ...)
        coordinates: (lat, lon, elevation)
    """

    id: str
    name: str
    kind: str
    coordinates: LatLonElevation

    @classmethod
    def from_node(cls, node: Node) -> "Location":
        """Location describing a graph node."""
        return cls(
            id=node.id,
            name=node.name,
            kind=node.kind.value,
            coordinates=node.location.as_lat_lon_elevation(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "kind": self.kind, "coordinates": list(self.coordinates)}


@dataclass(frozen=True)
class PathResult:
    """Raw shortest-path result.

    Attributes:
        node_ids: Node IDs from origin to destination
        edges: Edges traversed, in order
        total_weight: Sum of edge weights
    """

    node_ids: tuple[str, ...]
    edges: tuple[Edge, ...]
    total_weight: float


@dataclass(frozen=True)
class RouteStep:
    """One piste descent or lift ride of a route.

    Attributes:
        kind: "piste" or "lift"
        name: Piste or lift name
        difficulty: Piste difficulty, None for lifts
        from_location: Where the step starts
        to_location: Where the step ends
        distance_m: Length in meters
        elevation_change_m: Signed elevation change
        geometry: (lon, lat) points of the step
    """

    kind: str
    name: str
    difficulty: Optional[Difficulty]
    from_location: Location
    to_location: Location
    distance_m: float
    elevation_change_m: float
    geometry: tuple[tuple[float, float], ...] = field(default_factory=tuple, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "name": self.name,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "from": self.from_location.to_dict(),
            "to": self.to_location.to_dict(),
            "distance_m": self.distance_m,
            "elevation_change_m": self.elevation_change_m,
            "geometry": [list(pt) for pt in self.geometry],
        }


@dataclass(frozen=True)
class Route:
    """A computed route between two locations.

    Totals include walking connections even though those are not listed
    as steps.

    Attributes:
        id: Deterministic ID from endpoints and difficulty filter
        from_location: Origin
        to_location: Destination
        steps: Visible steps (pistes and lifts)
        total_distance_m: Total distance including connections
        total_elevation_down_m: Sum of descents (positive number)
        total_elevation_up_m: Sum of ascents
        estimated_minutes: Rounded-up travel time estimate, at least 1
        max_difficulty: Hardest piste on the route, None if the route has no piste
        path_geometry: (lon, lat) points of every traversed edge, connections included
    """

    id: str
    from_location: Location
    to_location: Location
    steps: tuple[RouteStep, ...]
    total_distance_m: float
    total_elevation_down_m: float
    total_elevation_up_m: float
    estimated_minutes: int
    max_difficulty: Optional[Difficulty]
    path_geometry: tuple[tuple[float, float], ...] = field(default_factory=tuple, repr=False)

    @property
    def lift_count(self) -> int:
        """Number of lift rides."""
        return sum(1 for step in self.steps if step.kind == RouteConfig.STEP_KIND_LIFT)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for presentation code."""
        return {
            "id": self.id,
            "from": self.from_location.to_dict(),
            "to": self.to_location.to_dict(),
            "steps": [step.to_dict() for step in self.steps],
            "total_distance_m": self.total_distance_m,
            "total_elevation_down_m": self.total_elevation_down_m,
            "total_elevation_up_m": self.total_elevation_up_m,
            "estimated_minutes": self.estimated_minutes,
            "max_difficulty": self.max_difficulty.value if self.max_difficulty else None,
            "path_geometry": [list(pt) for pt in self.path_geometry],
        }

    def __repr__(self) -> str:
        return (
            f"Route({self.from_location.id} -> {self.to_location.id}, {len(self.steps)} steps, "
            f"{self.total_distance_m:.0f}m, {self.estimated_minutes}min)"
        )
