"""Shared pytest fixtures for skiresort_navigator tests.

Provides feature factories and a small reference ski area.

COORDINATE SYSTEM:
    Synthetic features in the test modules sit on the prime meridian near the
    equator, where moving north by d meters is exactly d / METERS_PER_DEGREE
    degrees of latitude. This keeps expected distances readable without
    computing them with the code under test.

REFERENCE AREA (resort_* fixtures):
    Real Alpine coordinates. P1 (easy) runs from the lift top down to the
    P2 top, P2 (expert) continues down to the lift bottom, and lift L1 closes
    the loop back up to the P1 top.
"""

from typing import Callable, Optional

import pytest

from skiresort_navigator.builders.graph_builder import build_graph
from skiresort_navigator.model.difficulty import Difficulty
from skiresort_navigator.model.features import LiftFeature, LiftStation, PisteFeature
from skiresort_navigator.model.nav_graph import NavGraph

Triple = tuple[float, float, float]
PisteFactory = Callable[..., PisteFeature]
LiftFactory = Callable[..., LiftFeature]


# =============================================================================
# FEATURE FACTORIES
# =============================================================================


@pytest.fixture
def make_piste() -> PisteFactory:
    """Factory for pistes with a straight top -> bottom segment by default."""

    def _make(
        piste_id: str,
        top: Optional[Triple],
        bottom: Optional[Triple],
        difficulty: Difficulty = Difficulty.EASY,
        name: Optional[str] = None,
        segments: Optional[tuple] = None,
        length_m: Optional[float] = None,
    ) -> PisteFeature:
        if segments is None:
            segments = (((top[1], top[0]), (bottom[1], bottom[0])),) if top and bottom else ()
        return PisteFeature(
            id=piste_id,
            name=name if name is not None else f"Piste {piste_id}",
            difficulty=difficulty,
            segments=segments,
            top=top,
            bottom=bottom,
            length_m=length_m,
        )

    return _make


@pytest.fixture
def make_lift() -> LiftFactory:
    """Factory for lifts from (lat, lon, elevation) station triples, bottom first."""

    def _make(lift_id: str, *stations: Triple, name: Optional[str] = None) -> LiftFeature:
        return LiftFeature(
            id=lift_id,
            name=name if name is not None else f"Lift {lift_id}",
            stations=tuple(LiftStation(position=s) for s in stations),
        )

    return _make


# =============================================================================
# REFERENCE SKI AREA
# =============================================================================

SUMMIT = (46.90, 10.99, 2200.0)
MID_STATION = (46.89, 10.98, 1800.0)
VALLEY = (46.88, 10.97, 1500.0)


@pytest.fixture
def resort_pistes(make_piste: PisteFactory) -> list[PisteFeature]:
    return [
        make_piste("P1", top=SUMMIT, bottom=MID_STATION, difficulty=Difficulty.EASY, name="Panorama"),
        make_piste("P2", top=MID_STATION, bottom=VALLEY, difficulty=Difficulty.EXPERT, name="Wall"),
    ]


@pytest.fixture
def resort_lifts(make_lift: LiftFactory) -> list[LiftFeature]:
    return [make_lift("L1", VALLEY, SUMMIT, name="Gondola")]


@pytest.fixture
def resort_graph(resort_pistes: list[PisteFeature], resort_lifts: list[LiftFeature]) -> NavGraph:
    return build_graph(pistes=resort_pistes, lifts=resort_lifts)
