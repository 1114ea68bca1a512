"""Route search over the navigation graph.

Provides the Dijkstra path finder and the RoutePlanner service:
- find_path: lowest-weight path under a difficulty filter
- path_to_route / find_route: rider-facing route summaries
- RoutePlanner: graph snapshot with cached queries and coordinate snapping
"""

from skiresort_navigator.routing.path_finder import (
    estimate_minutes,
    find_path,
    find_route,
    is_edge_admissible,
    path_to_route,
    route_id,
)
from skiresort_navigator.routing.route_planner import RoutePlanner

__all__ = [
    "is_edge_admissible",
    "find_path",
    "path_to_route",
    "find_route",
    "route_id",
    "estimate_minutes",
    "RoutePlanner",
]
