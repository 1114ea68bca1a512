"""Workflow tests for the plan_route command-line script."""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "plan_route.py"


@pytest.fixture(scope="module")
def cli():
    """The plan_route script loaded as a module."""
    spec = importlib.util.spec_from_file_location("plan_route", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestPlanRouteCli:
    """End-to-end runs of main() against a features file."""

    def test_route_by_node_ids(self, cli, resort_file: Path, capsys: pytest.CaptureFixture) -> None:
        exit_code = cli.main([str(resort_file), "piste_top-P1", "piste_bottom-P2", "--difficulties", "easy,expert"])
        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Panorama" in out and "Wall" in out
        assert "hardest piste: expert" in out

    def test_route_by_coordinates_as_json(self, cli, resort_file: Path, capsys: pytest.CaptureFixture) -> None:
        exit_code = cli.main([str(resort_file), "46.90,10.99", "46.88,10.97", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert data["from"]["id"] == "piste_top-P1"
        assert data["to"]["id"] == "piste_bottom-P2"
        assert [step["name"] for step in data["steps"]] == ["Panorama", "Forest"]

    def test_no_route(self, cli, resort_file: Path, capsys: pytest.CaptureFixture) -> None:
        exit_code = cli.main([str(resort_file), "piste_top-P1", "piste_bottom-P2", "--difficulties", "easy"])
        assert exit_code == 1
        assert "No route" in capsys.readouterr().err

    def test_unknown_location(self, cli, resort_file: Path, capsys: pytest.CaptureFixture) -> None:
        exit_code = cli.main([str(resort_file), "nowhere", "piste_bottom-P2"])
        assert exit_code == 2
        assert "Unknown location: nowhere" in capsys.readouterr().err

    def test_parse_coordinates(self, cli) -> None:
        assert cli.parse_coordinates("46.9,10.9") == (46.9, 10.9)
        assert cli.parse_coordinates("piste_top-P1") is None
        assert cli.parse_coordinates("a,b") is None
