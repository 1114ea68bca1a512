"""Shared pytest fixtures for skiresort_navigator workflow tests.

Workflow tests drive the public entry points (RoutePlanner, the CLI) with
feature data in the JSON layout the web client delivers.

TEST AREA:
    Summit (46.90, 10.99, 2200) - Mid (46.89, 10.98, 1800) - Valley (46.88, 10.97, 1500)

    Gondola   valley -> mid -> summit (middle station unnamed)
    Panorama  easy          summit -> mid
    Wall      expert        mid -> valley, direct
    Forest    intermediate  mid -> valley, with a detour
    Ridge     easy          separate hill 15km away, unreachable
    Ghost     no end point  skipped by the builder
"""

import json
from pathlib import Path
from typing import Any

import pytest

from skiresort_navigator.model.features import LiftFeature, PisteFeature
from skiresort_navigator.routing.route_planner import RoutePlanner

SUMMIT = [46.90, 10.99, 2200]
MID = [46.89, 10.98, 1800]
VALLEY = [46.88, 10.97, 1500]

FeatureData = dict[str, list[dict[str, Any]]]


@pytest.fixture
def resort_data() -> FeatureData:
    """Feature dicts as delivered by the geodata pipeline."""
    return {
        "pistes": [
            {
                "id": "P1",
                "name": "Panorama",
                "difficulty": "novice",
                "coordinates": [[10.99, 46.90, 2200], [10.98, 46.89, 1800]],
                "startPoint": SUMMIT,
                "endPoint": MID,
            },
            {
                "id": "P2",
                "name": "Wall",
                "difficulty": "advanced",
                "coordinates": [[10.98, 46.89, 1800], [10.97, 46.88, 1500]],
                "startPoint": MID,
                "endPoint": VALLEY,
            },
            {
                "id": "P3",
                "name": "Forest",
                "difficulty": "intermediate",
                "coordinates": [[10.98, 46.89, 1800], [10.985, 46.885, 1650], [10.97, 46.88, 1500]],
                "startPoint": MID,
                "endPoint": VALLEY,
            },
            {
                "id": "P4",
                "name": "Ridge",
                "difficulty": "easy",
                "coordinates": [[11.10, 47.00, 1900], [11.09, 46.99, 1600]],
                "startPoint": [47.00, 11.10, 1900],
                "endPoint": [46.99, 11.09, 1600],
            },
            {
                "id": "P5",
                "name": "Ghost",
                "difficulty": "easy",
                "coordinates": [[10.99, 46.90, 2200]],
                "startPoint": SUMMIT,
            },
        ],
        "lifts": [
            {
                "id": "L1",
                "name": "Gondola",
                "type": "gondola",
                "stations": [
                    {"coordinates": VALLEY},
                    {"coordinates": MID},
                    {"coordinates": SUMMIT},
                ],
            },
        ],
    }


@pytest.fixture
def resort_features(resort_data: FeatureData) -> tuple[list[PisteFeature], list[LiftFeature]]:
    pistes = [PisteFeature.from_dict(item) for item in resort_data["pistes"]]
    lifts = [LiftFeature.from_dict(item) for item in resort_data["lifts"]]
    return pistes, lifts


@pytest.fixture
def planner(resort_features: tuple[list[PisteFeature], list[LiftFeature]]) -> RoutePlanner:
    pistes, lifts = resort_features
    return RoutePlanner(pistes=pistes, lifts=lifts)


@pytest.fixture
def resort_file(resort_data: FeatureData, tmp_path: Path) -> Path:
    """Feature data written to a JSON file for the CLI."""
    path = tmp_path / "resort.json"
    path.write_text(json.dumps(resort_data), encoding="utf-8")
    return path
