"""Path Finder - Dijkstra shortest paths over the navigation graph.

Finds the lowest-weight path between two nodes while honoring a set of
admissible piste difficulties, then turns the edge sequence into a Route.

Admissibility is checked while relaxing edges, so one graph serves every
difficulty filter without being rebuilt:
- lift_ascent: always admissible (lifts carry any rider)
- connection: always admissible (walking is unrestricted)
- piste_descent: admissible iff its difficulty is in the filter

"No route" is an expected outcome (disconnected areas, filtered pistes,
unknown node IDs) and is reported as None, never raised.
"""

import heapq
import itertools
import logging
from math import ceil
from typing import AbstractSet, Iterable, Optional

from skiresort_navigator.constants import IdConfig, RouteConfig
from skiresort_navigator.model.difficulty import Difficulty, format_difficulty_filter
from skiresort_navigator.model.edge import Edge, EdgeKind
from skiresort_navigator.model.nav_graph import NavGraph
from skiresort_navigator.model.route import Location, PathResult, Route, RouteStep

logger = logging.getLogger(__name__)


def is_edge_admissible(edge: Edge, difficulties: AbstractSet[Difficulty]) -> bool:
    """Check if an edge may be traversed under a difficulty filter."""
    if edge.kind in (EdgeKind.LIFT_ASCENT, EdgeKind.CONNECTION):
        return True
    return edge.difficulty in difficulties


def find_path(
    graph: NavGraph,
    from_id: str,
    to_id: str,
    difficulties: Iterable[Difficulty],
) -> Optional[PathResult]:
    """Find the lowest-weight path using Dijkstra's algorithm.

    The queue holds (distance, insertion counter, node_id), so equal
    distances pop in insertion order. The search stops as soon as the
    destination is popped.

    Args:
        graph: Navigation graph (read only)
        from_id: Origin node ID
        to_id: Destination node ID
        difficulties: Admissible piste difficulties

    Returns:
        PathResult, or None if either node is unknown or no admissible path exists.
    """
    if from_id not in graph or to_id not in graph:
        logger.debug(f"No route: unknown node ({from_id} -> {to_id})")
        return None

    allowed = frozenset(difficulties)
    distances: dict[str, float] = {from_id: 0.0}
    previous_edge: dict[str, Edge] = {}
    visited: set[str] = set()

    counter = itertools.count()
    queue: list[tuple[float, int, str]] = [(0.0, next(counter), from_id)]

    while queue:
        current_distance, _, current_id = heapq.heappop(queue)
        if current_id in visited:
            continue
        visited.add(current_id)

        if current_id == to_id:
            break

        for edge in graph.get_outgoing_edges(current_id):
            if not is_edge_admissible(edge=edge, difficulties=allowed):
                continue
            neighbor_id = edge.to_id
            if neighbor_id in visited:
                continue

            new_distance = current_distance + edge.weight
            if new_distance < distances.get(neighbor_id, float("inf")):
                distances[neighbor_id] = new_distance
                previous_edge[neighbor_id] = edge
                heapq.heappush(queue, (new_distance, next(counter), neighbor_id))

    if to_id not in visited:
        logger.debug(f"No route from {from_id} to {to_id} with difficulties {format_difficulty_filter(allowed)}")
        return None

    # Walk predecessor edges back to the origin
    edges: list[Edge] = []
    current_id = to_id
    while current_id != from_id:
        edge = previous_edge[current_id]
        edges.append(edge)
        current_id = edge.from_id
    edges.reverse()

    return PathResult(
        node_ids=(from_id, *(edge.to_id for edge in edges)),
        edges=tuple(edges),
        total_weight=distances[to_id],
    )


def route_id(from_id: str, to_id: str, difficulties: Optional[Iterable[Difficulty]] = None) -> str:
    """Deterministic route ID from endpoints and difficulty filter."""
    parts = [IdConfig.ROUTE_PREFIX, from_id, to_id]
    if difficulties is not None:
        text = format_difficulty_filter(difficulties)
        parts.append("all" if text is None else text or "none")
    return IdConfig.SEPARATOR.join(parts)


def estimate_minutes(distance_m: float, lift_count: int) -> int:
    """Travel time: total route distance at SKI_SPEED_KMH plus a fixed time per lift ride.

    distance_m includes lift and walking distance; LIFT_RIDE_MINUTES is added on
    top for each ride. Rounded up, never below RouteConfig.MIN_ESTIMATED_MINUTES.
    """
    skiing_minutes = distance_m / 1000 * 60 / RouteConfig.SKI_SPEED_KMH
    lift_minutes = lift_count * RouteConfig.LIFT_RIDE_MINUTES
    return max(ceil(skiing_minutes + lift_minutes), RouteConfig.MIN_ESTIMATED_MINUTES)


def path_to_route(
    graph: NavGraph,
    path: PathResult,
    from_location: Location,
    to_location: Location,
    difficulties: Optional[Iterable[Difficulty]] = None,
) -> Route:
    """Convert a path result to a rider-facing Route.

    Connection edges are left out of the step list but count toward distance,
    elevation, and time.

    Args:
        graph: Graph the path was found in
        path: Result of find_path
        from_location: Origin shown to the rider
        to_location: Destination shown to the rider
        difficulties: Filter used for the search (only used for the route ID)

    Returns:
        Route summary.
    """
    steps: list[RouteStep] = []
    total_distance = 0.0
    total_down = 0.0
    total_up = 0.0
    max_difficulty: Optional[Difficulty] = None
    geometry: list[tuple[float, float]] = []

    for edge in path.edges:
        total_distance += edge.distance_m

        if edge.elevation_change_m < 0:
            total_down += -edge.elevation_change_m
        else:
            total_up += edge.elevation_change_m

        for point in edge.geometry:
            if not geometry or geometry[-1] != point:
                geometry.append(point)

        if edge.is_connection:
            continue

        if edge.difficulty is not None and (max_difficulty is None or edge.difficulty.rank > max_difficulty.rank):
            max_difficulty = edge.difficulty

        steps.append(
            RouteStep(
                kind=RouteConfig.STEP_KIND_LIFT if edge.kind == EdgeKind.LIFT_ASCENT else RouteConfig.STEP_KIND_PISTE,
                name=edge.name,
                difficulty=edge.difficulty,
                from_location=Location.from_node(graph.nodes[edge.from_id]),
                to_location=Location.from_node(graph.nodes[edge.to_id]),
                distance_m=edge.distance_m,
                elevation_change_m=edge.elevation_change_m,
                geometry=edge.geometry,
            )
        )

    lift_count = sum(1 for step in steps if step.kind == RouteConfig.STEP_KIND_LIFT)

    return Route(
        id=route_id(from_id=from_location.id, to_id=to_location.id, difficulties=difficulties),
        from_location=from_location,
        to_location=to_location,
        steps=tuple(steps),
        total_distance_m=total_distance,
        total_elevation_down_m=total_down,
        total_elevation_up_m=total_up,
        estimated_minutes=estimate_minutes(distance_m=total_distance, lift_count=lift_count),
        max_difficulty=max_difficulty,
        path_geometry=tuple(geometry),
    )


def find_route(
    graph: NavGraph,
    from_location: Location,
    to_location: Location,
    difficulties: Iterable[Difficulty],
) -> Optional[Route]:
    """Find a route between two locations.

    Args:
        graph: Navigation graph
        from_location: Origin (its id must be a node ID)
        to_location: Destination (its id must be a node ID)
        difficulties: Admissible piste difficulties

    Returns:
        Route, or None if no admissible route exists.
    """
    allowed = frozenset(difficulties)
    path = find_path(graph=graph, from_id=from_location.id, to_id=to_location.id, difficulties=allowed)
    if path is None:
        return None
    return path_to_route(
        graph=graph,
        path=path,
        from_location=from_location,
        to_location=to_location,
        difficulties=allowed,
    )
