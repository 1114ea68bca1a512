"""Graph Builder - Turns piste and lift features into a navigation graph.

Construction steps:
1. Pistes: top node, bottom node, one downhill piste_descent edge
2. Lifts: one node per station, one lift_ascent edge first -> last station
3. Connections: walking edges (both directions) between nodes of different
   features that lie within GraphConfig.CONNECTION_THRESHOLD_M of each other

Weights:
- piste: distance × difficulty multiplier (easy 1, intermediate 2, expert 5)
- lift: fixed GraphConfig.LIFT_WEIGHT, independent of length
- connection: distance × GraphConfig.CONNECTION_WEIGHT_FACTOR

Incomplete features are skipped, never raised on. The builder is a pure
function of its input: the same features always give the same node IDs,
edge IDs, and weights.
"""

import logging
from typing import Iterable, Optional, cast

from skiresort_navigator.constants import GraphConfig, IdConfig, NameConfig
from skiresort_navigator.core.geo_calculator import GeoCalculator
from skiresort_navigator.core.spatial_index import NodeProximityIndex
from skiresort_navigator.model.edge import Edge, EdgeKind
from skiresort_navigator.model.features import LatLonElevation, LiftFeature, PisteFeature
from skiresort_navigator.model.nav_graph import NavGraph
from skiresort_navigator.model.node import FeatureType, Node, NodeKey, NodeKind
from skiresort_navigator.model.path_point import PathPoint

logger = logging.getLogger(__name__)


def _edge_id(*parts: str) -> str:
    return IdConfig.SEPARATOR.join(parts)


class GraphBuilder:
    """Builds a NavGraph from piste and lift features.

    Each call to build() starts from an empty graph, so one builder can be
    reused for several data refreshes.

    Example:
        builder = GraphBuilder()
        graph = builder.build(pistes=pistes, lifts=lifts)
    """

    def __init__(
        self,
        connection_threshold_m: float = GraphConfig.CONNECTION_THRESHOLD_M,
        use_spatial_index: Optional[bool] = None,
    ) -> None:
        """Initialize the builder.

        Args:
            connection_threshold_m: Inclusive walking-link distance in meters
            use_spatial_index: Force KD-tree (True) or pairwise scan (False)
                for connection search. None decides by node count.
        """
        self.connection_threshold_m = connection_threshold_m
        self.use_spatial_index = use_spatial_index
        self._reset()

    def _reset(self) -> None:
        self._nodes: dict[str, Node] = {}
        self._edges: list[Edge] = []
        self._linked_pairs: set[frozenset[str]] = set()

    def build(self, pistes: Iterable[PisteFeature], lifts: Iterable[LiftFeature]) -> NavGraph:
        """Build the navigation graph.

        Args:
            pistes: Piste features
            lifts: Lift features

        Returns:
            New immutable NavGraph.
        """
        self._reset()
        skipped = 0

        seen_pistes: set[str] = set()
        for piste in pistes:
            if not piste.is_routable:
                logger.debug(f"Skipping piste {piste.id} ({piste.name!r}): missing endpoints or geometry")
                skipped += 1
                continue
            if piste.id in seen_pistes:
                logger.warning(f"Skipping duplicate piste id {piste.id} ({piste.name!r})")
                skipped += 1
                continue
            seen_pistes.add(piste.id)
            self._add_piste(piste=piste)

        seen_lifts: set[str] = set()
        for lift in lifts:
            if not lift.is_routable:
                logger.debug(f"Skipping lift {lift.id} ({lift.name!r}): fewer than 2 usable stations")
                skipped += 1
                continue
            if lift.id in seen_lifts:
                logger.warning(f"Skipping duplicate lift id {lift.id} ({lift.name!r})")
                skipped += 1
                continue
            seen_lifts.add(lift.id)
            self._add_lift(lift=lift)

        connection_count = self._synthesize_connections()

        graph = NavGraph(nodes=self._nodes.values(), edges=self._edges)
        logger.info(
            f"Graph built: {len(seen_pistes)} pistes, {len(seen_lifts)} lifts, "
            f"{connection_count} connections, {len(graph.nodes)} nodes, {len(graph.edges)} edges, "
            f"{skipped} features skipped"
        )
        self._reset()
        return graph

    # =========================================================================
    # Nodes and edges
    # =========================================================================

    def _add_node(self, node: Node) -> Node:
        self._nodes[node.id] = node
        return node

    def _add_edge(self, edge: Edge) -> None:
        """Append an edge; both endpoints must already be in the node table."""
        if edge.from_id not in self._nodes or edge.to_id not in self._nodes:
            raise ValueError(f"Edge {edge.id} added before its nodes ({edge.from_id} -> {edge.to_id})")
        self._edges.append(edge)
        self._linked_pairs.add(frozenset((edge.from_id, edge.to_id)))

    # =========================================================================
    # Pistes
    # =========================================================================

    def _add_piste(self, piste: PisteFeature) -> None:
        """Add top and bottom nodes plus the descent edge; callers pass routable pistes only."""
        name = piste.name or NameConfig.UNNAMED_PISTE
        top = PathPoint.from_lat_lon_elevation(cast(LatLonElevation, piste.top))
        bottom = PathPoint.from_lat_lon_elevation(cast(LatLonElevation, piste.bottom))

        top_node = self._add_node(
            Node.create(
                key=NodeKey(kind=NodeKind.PISTE_TOP, feature_id=piste.id),
                name=f"{name} {NameConfig.PISTE_TOP_SUFFIX}",
                location=top,
                feature_type=FeatureType.PISTE,
            )
        )
        bottom_node = self._add_node(
            Node.create(
                key=NodeKey(kind=NodeKind.PISTE_BOTTOM, feature_id=piste.id),
                name=f"{name} {NameConfig.PISTE_BOTTOM_SUFFIX}",
                location=bottom,
                feature_type=FeatureType.PISTE,
            )
        )

        distance, estimated = self._piste_length_m(piste=piste)
        self._add_edge(
            Edge(
                id=_edge_id(IdConfig.PISTE_EDGE_PREFIX, piste.id),
                from_id=top_node.id,
                to_id=bottom_node.id,
                kind=EdgeKind.PISTE_DESCENT,
                name=name,
                distance_m=distance,
                elevation_change_m=bottom.elevation - top.elevation,
                weight=distance * piste.difficulty.weight_multiplier,
                difficulty=piste.difficulty,
                geometry=tuple(point for segment in piste.segments for point in segment),
                length_is_estimated=estimated,
            )
        )

    @staticmethod
    def _piste_length_m(piste: PisteFeature) -> tuple[float, bool]:
        """Piste length from its geometry, falling back to the length attribute.

        Returns:
            (length_m, is_estimated). is_estimated is True whenever the
            geometry did not yield a positive length.
        """
        measured = GeoCalculator.multi_polyline_length_m(segments=piste.segments)
        if measured > 0:
            return measured, False

        if piste.length_m is not None and piste.length_m > 0:
            logger.warning(
                f"Piste {piste.id} ({piste.name!r}) geometry has zero length, "
                f"using length attribute {piste.length_m:.0f}m"
            )
            return piste.length_m, True

        logger.warning(
            f"Piste {piste.id} ({piste.name!r}) has neither geometry length nor length attribute, "
            f"assuming {GraphConfig.DEFAULT_PISTE_LENGTH_M:.0f}m"
        )
        return GraphConfig.DEFAULT_PISTE_LENGTH_M, True

    # =========================================================================
    # Lifts
    # =========================================================================

    def _add_lift(self, lift: LiftFeature) -> None:
        """Add station nodes and a single bottom -> top edge.

        Intermediate stations become nodes (so walking connections can reach
        them) but get no lift hop of their own.
        """
        name = lift.name or NameConfig.UNNAMED_LIFT
        last_index = len(lift.stations) - 1
        station_points = [PathPoint.from_lat_lon_elevation(station.position) for station in lift.stations]

        station_nodes = [
            self._add_node(
                Node.create(
                    key=NodeKey(kind=NodeKind.LIFT_STATION, feature_id=lift.id, index=i),
                    name=station.name or self._station_label(lift_name=name, index=i, last_index=last_index),
                    location=point,
                    feature_type=FeatureType.LIFT,
                )
            )
            for i, (station, point) in enumerate(zip(lift.stations, station_points))
        ]

        bottom, top = station_points[0], station_points[-1]
        geometry = lift.coordinates or tuple(point.lon_lat for point in station_points)
        self._add_edge(
            Edge(
                id=_edge_id(IdConfig.LIFT_EDGE_PREFIX, lift.id),
                from_id=station_nodes[0].id,
                to_id=station_nodes[-1].id,
                kind=EdgeKind.LIFT_ASCENT,
                name=name,
                distance_m=bottom.distance_to(other=top),
                elevation_change_m=top.elevation - bottom.elevation,
                weight=GraphConfig.LIFT_WEIGHT,
                geometry=tuple(geometry),
            )
        )

    @staticmethod
    def _station_label(lift_name: str, index: int, last_index: int) -> str:
        if index == 0:
            return f"{lift_name} {NameConfig.LIFT_BOTTOM_SUFFIX}"
        if index == last_index:
            return f"{lift_name} {NameConfig.LIFT_TOP_SUFFIX}"
        return f"{lift_name} {NameConfig.LIFT_MIDDLE_SUFFIX} {index + 1}"

    # =========================================================================
    # Connections
    # =========================================================================

    def _synthesize_connections(self) -> int:
        """Link nearby nodes of different features with walking edges.

        Pairs are visited in node insertion order. A pair is skipped when both
        nodes come from the same feature or when any edge already links them
        (in either direction).

        Returns:
            Number of bidirectional connections added.
        """
        nodes = list(self._nodes.values())
        index = NodeProximityIndex(
            positions=[node.location.lat_lon for node in nodes],
            use_kdtree=self.use_spatial_index,
        )

        added = 0
        for i, j, distance in index.pairs_within(threshold_m=self.connection_threshold_m):
            node_a, node_b = nodes[i], nodes[j]
            if node_a.feature_key == node_b.feature_key:
                continue
            if frozenset((node_a.id, node_b.id)) in self._linked_pairs:
                continue
            self._add_edge(self._connection_edge(from_node=node_a, to_node=node_b, distance=distance))
            self._add_edge(self._connection_edge(from_node=node_b, to_node=node_a, distance=distance))
            added += 1

        return added

    @staticmethod
    def _connection_edge(from_node: Node, to_node: Node, distance: float) -> Edge:
        return Edge(
            id=_edge_id(IdConfig.CONNECTION_EDGE_PREFIX, from_node.id, to_node.id),
            from_id=from_node.id,
            to_id=to_node.id,
            kind=EdgeKind.CONNECTION,
            name=NameConfig.CONNECTION_NAME,
            distance_m=distance,
            elevation_change_m=to_node.elevation - from_node.elevation,
            weight=distance * GraphConfig.CONNECTION_WEIGHT_FACTOR,
            geometry=(from_node.location.lon_lat, to_node.location.lon_lat),
        )


def build_graph(pistes: Iterable[PisteFeature], lifts: Iterable[LiftFeature]) -> NavGraph:
    """Build a navigation graph with default settings.

    Args:
        pistes: Piste features
        lifts: Lift features

    Returns:
        New immutable NavGraph.
    """
    return GraphBuilder().build(pistes=pistes, lifts=lifts)
