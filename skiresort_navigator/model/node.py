"""Node - Routable point in the navigation graph.

A Node is created for each piste endpoint and each lift station. It wraps a
PathPoint for its location and records which source feature it came from,
so connection synthesis never needs to parse IDs.

Node IDs are derived deterministically from a NodeKey, so rebuilding the
graph from the same features yields the same IDs (needed for stable
selections and shareable URLs).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from skiresort_navigator.constants import IdConfig
from skiresort_navigator.model.path_point import PathPoint


class NodeKind(Enum):
    """Role of a node in the graph."""

    PISTE_TOP = "piste_top"
    PISTE_BOTTOM = "piste_bottom"
    LIFT_STATION = "lift_station"
    INTERSECTION = "intersection"  # Reserved, never produced by the builder


class FeatureType(Enum):
    """Kind of source feature a node belongs to."""

    PISTE = "piste"
    LIFT = "lift"


@dataclass(frozen=True)
class NodeKey:
    """Structured identity of a node.

    Attributes:
        kind: Node role
        feature_id: Source feature ID
        index: Station index for lift stations, None otherwise

    Example:
        NodeKey(kind=NodeKind.LIFT_STATION, feature_id="77", index=0).to_id()  # "lift_station-77-0"
    """

    kind: NodeKind
    feature_id: str
    index: Optional[int] = None

    def to_id(self) -> str:
        """Serialize to the stable string ID used at the interface boundary."""
        parts = [self.kind.value, self.feature_id]
        if self.index is not None:
            parts.append(str(self.index))
        return IdConfig.SEPARATOR.join(parts)


@dataclass(frozen=True)
class Node:
    """A routable point in the navigation graph.

    Attributes:
        id: Stable ID (serialized NodeKey)
        name: Display label
        kind: Node role
        location: PathPoint with coordinates and elevation
        feature_type: Type of the originating feature
        feature_id: ID of the originating feature
    """

    id: str
    name: str
    kind: NodeKind
    location: PathPoint
    feature_type: FeatureType
    feature_id: str

    @classmethod
    def create(cls, key: NodeKey, name: str, location: PathPoint, feature_type: FeatureType) -> "Node":
        """Create a node whose ID and origin come from its key."""
        return cls(
            id=key.to_id(),
            name=name,
            kind=key.kind,
            location=location,
            feature_type=feature_type,
            feature_id=key.feature_id,
        )

    @property
    def feature_key(self) -> tuple[FeatureType, str]:
        """Identity of the originating feature (type and ID)."""
        return (self.feature_type, self.feature_id)

    @property
    def lat(self) -> float:
        """Latitude delegated from location."""
        return self.location.lat

    @property
    def lon(self) -> float:
        """Longitude delegated from location."""
        return self.location.lon

    @property
    def elevation(self) -> float:
        """Elevation delegated from location."""
        return self.location.elevation

    def distance_to(self, lat: float, lon: float) -> float:
        """Horizontal great-circle distance to given coordinates in meters."""
        target = PathPoint(lon=lon, lat=lat, elevation=0.0)
        return self.location.distance_to(other=target)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "coordinates": list(self.location.as_lat_lon_elevation()),
            "feature_type": self.feature_type.value,
            "feature_id": self.feature_id,
        }

    def __repr__(self) -> str:
        return f"Node({self.id}, {self.location})"
