"""Edge - Directed, weighted traversal option between two nodes.

Three kinds of edges:
- piste_descent: skiing a piste from its top to its bottom (downhill only)
- lift_ascent: riding a lift from its first to its last station
- connection: walking between nearby nodes of different features

Undirected relationships (connections) are stored as two edges.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from skiresort_navigator.model.difficulty import Difficulty


class EdgeKind(Enum):
    """How an edge is traversed."""

    PISTE_DESCENT = "piste_descent"
    LIFT_ASCENT = "lift_ascent"
    CONNECTION = "connection"


@dataclass(frozen=True)
class Edge:
    """A directed, weighted edge.

    Attributes:
        id: Stable ID, unique within the graph
        from_id: Source node ID
        to_id: Target node ID
        kind: Edge kind
        name: Piste or lift name ("Connection" for walking links)
        distance_m: Path length in meters (non-negative)
        elevation_change_m: Signed elevation change (negative = descent)
        weight: Search cost (non-negative)
        difficulty: Set only on piste descents
        geometry: (lon, lat) points for drawing the traversed path
        length_is_estimated: True if distance_m did not come from geometry
    """

    id: str
    from_id: str
    to_id: str
    kind: EdgeKind
    name: str
    distance_m: float
    elevation_change_m: float
    weight: float
    difficulty: Optional[Difficulty] = None
    geometry: tuple[tuple[float, float], ...] = field(default_factory=tuple, repr=False)
    length_is_estimated: bool = False

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if self.distance_m < 0 or self.weight < 0:
            raise ValueError(f"Edge {self.id} must have non-negative distance and weight")
        if (self.kind == EdgeKind.PISTE_DESCENT) != (self.difficulty is not None):
            raise ValueError(f"Edge {self.id}: difficulty is required on piste descents and only there")

    @property
    def is_connection(self) -> bool:
        """Walking link between features (not shown as a route step)."""
        return self.kind == EdgeKind.CONNECTION

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "id": self.id,
            "from": self.from_id,
            "to": self.to_id,
            "kind": self.kind.value,
            "name": self.name,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "distance_m": self.distance_m,
            "elevation_change_m": self.elevation_change_m,
            "weight": self.weight,
            "geometry": [list(pt) for pt in self.geometry],
            "length_is_estimated": self.length_is_estimated,
        }
