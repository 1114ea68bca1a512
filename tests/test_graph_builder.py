"""Tests for GraphBuilder.

Tests: node/edge construction, weights, connection synthesis, skipped and
       duplicate features, length fallback, spatial index equivalence
Focus: Deterministic output and the graph invariants the path finder relies on
"""

import logging
from math import pi

import pytest

from skiresort_navigator.builders.graph_builder import GraphBuilder, build_graph
from skiresort_navigator.constants import EARTH_RADIUS_M, GraphConfig
from skiresort_navigator.core.geo_calculator import GeoCalculator
from skiresort_navigator.model.difficulty import Difficulty
from skiresort_navigator.model.edge import EdgeKind
from skiresort_navigator.model.nav_graph import NavGraph

METERS_PER_DEGREE = pi * EARTH_RADIUS_M / 180


def at(north_m: float, elevation: float) -> tuple[float, float, float]:
    """(lat, lon, elevation) `north_m` meters north of (0, 0)."""
    return (north_m / METERS_PER_DEGREE, 0.0, elevation)


class TestGraphBuilderStructure:
    """Nodes and edges created per feature."""

    def test_reference_area_nodes(self, resort_graph: NavGraph) -> None:
        """One node per piste end and per lift station, with generated labels."""
        assert set(resort_graph.nodes) == {
            "piste_top-P1",
            "piste_bottom-P1",
            "piste_top-P2",
            "piste_bottom-P2",
            "lift_station-L1-0",
            "lift_station-L1-1",
        }
        assert resort_graph.nodes["piste_top-P1"].name == "Panorama (Top)"
        assert resort_graph.nodes["lift_station-L1-0"].name == "Gondola Bottom"
        assert resort_graph.nodes["lift_station-L1-1"].name == "Gondola Top"

    def test_every_edge_endpoint_exists(self, resort_graph: NavGraph) -> None:
        """No edge references a node missing from the graph."""
        for edge in resort_graph.edges:
            assert edge.from_id in resort_graph.nodes
            assert edge.to_id in resort_graph.nodes

    def test_piste_edge_runs_downhill(self, resort_graph: NavGraph) -> None:
        """Piste edges go top -> bottom only, with signed elevation change."""
        (edge,) = [e for e in resort_graph.get_outgoing_edges("piste_top-P2") if e.kind == EdgeKind.PISTE_DESCENT]
        assert edge.id == "piste-P2"
        assert edge.to_id == "piste_bottom-P2"
        assert edge.difficulty == Difficulty.EXPERT
        assert edge.elevation_change_m == pytest.approx(-300.0)
        assert not edge.length_is_estimated
        assert not any(e.kind == EdgeKind.PISTE_DESCENT for e in resort_graph.get_outgoing_edges("piste_bottom-P2"))

    def test_piste_weight_uses_difficulty_multiplier(self, resort_graph: NavGraph) -> None:
        """Expert piste costs 5× its length, easy piste 1×."""
        easy = next(e for e in resort_graph.edges if e.id == "piste-P1")
        expert = next(e for e in resort_graph.edges if e.id == "piste-P2")
        expected_length = GeoCalculator.haversine_distance_m(lat1=46.89, lon1=10.98, lat2=46.88, lon2=10.97)
        assert expert.distance_m == pytest.approx(expected_length)
        assert expert.weight == pytest.approx(5 * expert.distance_m)
        assert easy.weight == pytest.approx(easy.distance_m)

    def test_equal_length_pistes_weighted_by_difficulty(self, make_piste) -> None:
        """Two pistes of identical geometry: expert costs exactly 5× easy."""
        easy = make_piste("E", top=at(1000, 1500.0), bottom=at(0, 1000.0), difficulty=Difficulty.EASY)
        expert = make_piste("X", top=at(1000, 1500.0), bottom=at(0, 1000.0), difficulty=Difficulty.EXPERT)
        graph = build_graph(pistes=[easy, expert], lifts=[])

        easy_edge = next(e for e in graph.edges if e.id == "piste-E")
        expert_edge = next(e for e in graph.edges if e.id == "piste-X")
        assert easy_edge.distance_m == pytest.approx(expert_edge.distance_m)
        assert easy_edge.weight == pytest.approx(1000.0)
        assert expert_edge.weight == pytest.approx(5 * easy_edge.weight)

    def test_lift_edge_has_fixed_weight(self, resort_graph: NavGraph) -> None:
        """Lift edge links first to last station at the flat lift weight."""
        (edge,) = [e for e in resort_graph.edges if e.kind == EdgeKind.LIFT_ASCENT]
        assert edge.id == "lift-L1"
        assert (edge.from_id, edge.to_id) == ("lift_station-L1-0", "lift_station-L1-1")
        assert edge.weight == GraphConfig.LIFT_WEIGHT
        assert edge.elevation_change_m == pytest.approx(700.0)
        assert edge.difficulty is None

    def test_intermediate_station_is_node_without_own_hop(self, make_lift) -> None:
        """Middle stations are nodes but the only hop is bottom -> top."""
        lift = make_lift("L9", at(0, 1000.0), at(800, 1300.0), at(1600, 1600.0), name="Chair")
        graph = build_graph(pistes=[], lifts=[lift])

        assert set(graph.nodes) == {"lift_station-L9-0", "lift_station-L9-1", "lift_station-L9-2"}
        assert graph.nodes["lift_station-L9-1"].name == "Chair Station 2"
        assert [(e.from_id, e.to_id) for e in graph.edges] == [("lift_station-L9-0", "lift_station-L9-2")]

    def test_rebuild_is_deterministic(self, resort_pistes, resort_lifts) -> None:
        """Same features give identical IDs, weights and geometry."""
        first = build_graph(pistes=resort_pistes, lifts=resort_lifts)
        second = build_graph(pistes=resort_pistes, lifts=resort_lifts)
        assert first.to_dict() == second.to_dict()

    def test_builder_reusable(self, resort_pistes, resort_lifts) -> None:
        """A second build() does not carry over nodes from the first."""
        builder = GraphBuilder()
        builder.build(pistes=resort_pistes, lifts=resort_lifts)
        graph = builder.build(pistes=resort_pistes[:1], lifts=[])
        assert set(graph.nodes) == {"piste_top-P1", "piste_bottom-P1"}


class TestConnections:
    """Walking links between nearby nodes of different features."""

    def test_reference_area_connections(self, resort_graph: NavGraph) -> None:
        """Coinciding ends of different features are linked both ways."""
        connections = {(e.from_id, e.to_id) for e in resort_graph.edges if e.kind == EdgeKind.CONNECTION}
        assert connections == {
            ("piste_top-P1", "lift_station-L1-1"),
            ("lift_station-L1-1", "piste_top-P1"),
            ("piste_bottom-P1", "piste_top-P2"),
            ("piste_top-P2", "piste_bottom-P1"),
            ("piste_bottom-P2", "lift_station-L1-0"),
            ("lift_station-L1-0", "piste_bottom-P2"),
        }

    def test_connection_ids_and_weight(self, make_piste) -> None:
        """Connection ID names both ends; weight is twice the walking distance."""
        upper = make_piste("A", top=at(1000, 1500.0), bottom=at(500, 1300.0))
        lower = make_piste("B", top=at(470, 1290.0), bottom=at(0, 1000.0))
        graph = build_graph(pistes=[upper, lower], lifts=[])

        edge = next(e for e in graph.edges if e.id == "connection-piste_bottom-A-piste_top-B")
        assert edge.distance_m == pytest.approx(30.0, abs=1e-6)
        assert edge.weight == pytest.approx(2 * edge.distance_m)
        assert edge.elevation_change_m == pytest.approx(-10.0)
        assert any(e.id == "connection-piste_top-B-piste_bottom-A" for e in graph.edges)

    @pytest.mark.parametrize("use_spatial_index", [False, True])
    @pytest.mark.parametrize("base_m", [500.0, 450.0, 1000.0, 12345.6])
    @pytest.mark.parametrize("gap_m, connected", [(0.0, True), (49.0, True), (50.0, True), (51.0, False)])
    def test_connection_threshold(
        self, make_piste, gap_m: float, connected: bool, base_m: float, use_spatial_index: bool
    ) -> None:
        """Nodes up to and exactly 50m apart are linked, 51m apart are not, wherever they sit."""
        upper = make_piste("A", top=at(base_m + 500, 1500.0), bottom=at(base_m, 1300.0))
        lower = make_piste("B", top=at(base_m - gap_m, 1300.0), bottom=at(base_m - gap_m - 500, 1000.0))
        graph = GraphBuilder(use_spatial_index=use_spatial_index).build(pistes=[upper, lower], lifts=[])
        has_connection = any(e.kind == EdgeKind.CONNECTION for e in graph.edges)
        assert has_connection is connected

    def test_custom_threshold(self, make_piste) -> None:
        """A larger threshold links nodes 80m apart."""
        upper = make_piste("A", top=at(1000, 1500.0), bottom=at(500, 1300.0))
        lower = make_piste("B", top=at(420, 1300.0), bottom=at(0, 1000.0))
        graph = GraphBuilder(connection_threshold_m=100.0).build(pistes=[upper, lower], lifts=[])
        assert any(e.kind == EdgeKind.CONNECTION for e in graph.edges)

    def test_no_connection_within_same_feature(self, make_piste, make_lift) -> None:
        """A 30m piste and a 20m lift never link their own endpoints."""
        short_piste = make_piste("S", top=at(30, 1010.0), bottom=at(0, 1000.0))
        short_lift = make_lift("T", at(5000, 1000.0), at(5020, 1010.0))
        graph = build_graph(pistes=[short_piste], lifts=[short_lift])
        assert not any(e.kind == EdgeKind.CONNECTION for e in graph.edges)

    def test_spatial_index_gives_same_graph(self, make_piste) -> None:
        """KD-tree and pairwise search produce identical graphs."""
        pistes = [
            make_piste(f"R{i}", top=at(i * 40.0 + 300, 1500.0 - i), bottom=at(i * 40.0, 1200.0 - i))
            for i in range(60)
        ]
        brute = GraphBuilder(use_spatial_index=False).build(pistes=pistes, lifts=[])
        tree = GraphBuilder(use_spatial_index=True).build(pistes=pistes, lifts=[])
        assert any(e.kind == EdgeKind.CONNECTION for e in brute.edges)
        assert brute.to_dict() == tree.to_dict()


class TestIncompleteInput:
    """Skipped, duplicate, and length-less features."""

    def test_unroutable_features_skipped(self, make_piste, make_lift) -> None:
        """Pistes missing an end and single-station lifts add nothing."""
        no_bottom = make_piste("X", top=at(100, 1100.0), bottom=None)
        single_station = make_lift("Y", at(0, 1000.0))
        good = make_piste("G", top=at(5000, 1500.0), bottom=at(4000, 1200.0))
        graph = build_graph(pistes=[no_bottom, good], lifts=[single_station])
        assert set(graph.nodes) == {"piste_top-G", "piste_bottom-G"}

    def test_piste_with_non_finite_endpoint_skipped(self, make_piste) -> None:
        """Endpoints present but NaN are skipped at the loop, before any node is created."""
        nan_top = make_piste(
            "N", top=(float("nan"), 0.0, 1500.0), bottom=at(0, 1000.0), segments=(((0.0, 0.0), (0.0, 0.001)),)
        )
        good = make_piste("G", top=at(5000, 1500.0), bottom=at(4000, 1200.0))
        graph = build_graph(pistes=[nan_top, good], lifts=[])
        assert set(graph.nodes) == {"piste_top-G", "piste_bottom-G"}
        assert [e.id for e in graph.edges] == ["piste-G"]

    def test_duplicate_piste_first_wins(self, make_piste, caplog: pytest.LogCaptureFixture) -> None:
        """A repeated piste ID keeps the first feature and logs a warning."""
        first = make_piste("D", top=at(1000, 1500.0), bottom=at(0, 1000.0), name="First")
        second = make_piste("D", top=at(3000, 1800.0), bottom=at(2000, 1600.0), name="Second")
        with caplog.at_level(logging.WARNING):
            graph = build_graph(pistes=[first, second], lifts=[])
        assert graph.nodes["piste_top-D"].name == "First (Top)"
        assert len(graph.edges) == 1
        assert "duplicate piste id D" in caplog.text

    def test_length_attribute_used_when_geometry_degenerate(
        self, make_piste, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Zero-length geometry falls back to the length attribute, flagged and logged."""
        top, bottom = at(1000, 1500.0), at(0, 1000.0)
        piste = make_piste(
            "Z",
            top=top,
            bottom=bottom,
            difficulty=Difficulty.INTERMEDIATE,
            segments=(((0.0, 0.0), (0.0, 0.0)),),
            length_m=800.0,
        )
        with caplog.at_level(logging.WARNING):
            graph = build_graph(pistes=[piste], lifts=[])
        (edge,) = graph.edges
        assert edge.distance_m == 800.0
        assert edge.weight == pytest.approx(1600.0)
        assert edge.length_is_estimated
        assert "geometry has zero length" in caplog.text

    def test_default_length_when_nothing_known(self, make_piste, caplog: pytest.LogCaptureFixture) -> None:
        """Without geometry length or attribute the default length is used, flagged and logged."""
        piste = make_piste("Z", top=at(1000, 1500.0), bottom=at(0, 1000.0), segments=(((0.0, 0.0),),))
        with caplog.at_level(logging.WARNING):
            graph = build_graph(pistes=[piste], lifts=[])
        (edge,) = graph.edges
        assert edge.distance_m == GraphConfig.DEFAULT_PISTE_LENGTH_M
        assert edge.length_is_estimated
        assert "neither geometry length nor length attribute" in caplog.text
