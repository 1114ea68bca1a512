"""Input features - Pistes and lifts as delivered by the geodata pipeline.

These are the upstream contract of the routing engine. They arrive already
parsed (OSM/Overpass in the reference application) and are routinely
incomplete: a piste may lack an endpoint, a lift may have a single station.
Such features are not errors; `is_routable` tells the graph builder to skip
them.

Coordinate conventions:
- Point triples (endpoints, stations): (lat, lon, elevation)
- Line geometry (segments, lift coordinates): (lon, lat) pairs, GeoJSON order
"""

from dataclasses import dataclass, field
from math import isfinite
from typing import Any, Optional

from skiresort_navigator.model.difficulty import Difficulty

LatLonElevation = tuple[float, float, float]
LonLat = tuple[float, float]


def _is_valid_triple(triple: Optional[LatLonElevation]) -> bool:
    return triple is not None and len(triple) == 3 and all(isfinite(v) for v in triple)


def _as_triple(raw: Any) -> Optional[LatLonElevation]:
    if raw is None:
        return None
    return tuple(float(v) for v in raw)  # type: ignore[return-value]


def _as_line(raw: Any) -> tuple[LonLat, ...]:
    return tuple((float(lon), float(lat)) for lon, lat, *_ in raw)


@dataclass(frozen=True)
class PisteFeature:
    """A ski piste (downhill run).

    Attributes:
        id: Source feature ID (e.g., OSM way ID)
        name: Display name
        difficulty: Piste difficulty
        segments: One or more (lon, lat) polylines making up the run
        top: Start point (lat, lon, elevation), None if unknown
        bottom: End point (lat, lon, elevation), None if unknown
        length_m: Pre-computed length, used only when geometry has no length

    Example:
        piste = PisteFeature(
            id="p1",
            name="Valley Run",
            difficulty=Difficulty.EASY,
            segments=(((10.99, 46.90), (10.98, 46.89)),),
            top=(46.90, 10.99, 2200.0),
            bottom=(46.89, 10.98, 1800.0),
        )
    """

    id: str
    name: str
    difficulty: Difficulty
    segments: tuple[tuple[LonLat, ...], ...]
    top: Optional[LatLonElevation] = None
    bottom: Optional[LatLonElevation] = None
    length_m: Optional[float] = None

    @property
    def is_routable(self) -> bool:
        """Both endpoints present with finite values and at least one segment."""
        return _is_valid_triple(self.top) and _is_valid_triple(self.bottom) and len(self.segments) > 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PisteFeature":
        """Create PisteFeature from dictionary.

        Accepts either "segments" (list of polylines) or a flat "coordinates"
        polyline, and "top"/"bottom" or the "startPoint"/"endPoint" keys used
        by the web client.
        """
        if "segments" in data:
            segments = tuple(_as_line(seg) for seg in data["segments"])
        elif data.get("coordinates"):
            segments = (_as_line(data["coordinates"]),)
        else:
            segments = ()
        length = data.get("length_m", data.get("length"))
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            difficulty=Difficulty.parse(data.get("difficulty")),
            segments=segments,
            top=_as_triple(data.get("top", data.get("startPoint"))),
            bottom=_as_triple(data.get("bottom", data.get("endPoint"))),
            length_m=float(length) if length is not None else None,
        )

    def __repr__(self) -> str:
        return f"PisteFeature({self.id}, {self.name!r}, {self.difficulty.value})"


@dataclass(frozen=True)
class LiftStation:
    """A lift station (loading or unloading point).

    Attributes:
        position: (lat, lon, elevation)
        name: Station name if the source data has one
    """

    position: LatLonElevation
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LiftStation":
        """Create LiftStation from dictionary ("position" or "coordinates" key)."""
        return cls(
            position=_as_triple(data.get("position", data.get("coordinates"))),  # type: ignore[arg-type]
            name=data.get("name"),
        )


@dataclass(frozen=True)
class LiftFeature:
    """A ski lift with ordered stations, bottom first.

    Attributes:
        id: Source feature ID
        name: Display name
        stations: Stations ordered from bottom to top
        coordinates: Cable line (lon, lat) for rendering, may be empty
        lift_type: Free-form type label (e.g., "Gondola")
    """

    id: str
    name: str
    stations: tuple[LiftStation, ...]
    coordinates: tuple[LonLat, ...] = field(default_factory=tuple)
    lift_type: str = ""

    @property
    def is_routable(self) -> bool:
        """At least two stations, all with finite coordinates."""
        return len(self.stations) >= 2 and all(_is_valid_triple(s.position) for s in self.stations)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LiftFeature":
        """Create LiftFeature from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            stations=tuple(LiftStation.from_dict(s) for s in data.get("stations") or []),
            coordinates=_as_line(data.get("coordinates") or []),
            lift_type=data.get("lift_type", data.get("type", "")) or "",
        )

    def __repr__(self) -> str:
        return f"LiftFeature({self.id}, {self.name!r}, {len(self.stations)} stations)"
