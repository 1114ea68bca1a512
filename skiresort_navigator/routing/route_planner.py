"""RoutePlanner - Graph snapshot plus cached route queries.

Owns one NavGraph built from the current feature data and answers route
queries against it. Results are cached per (origin, destination,
difficulty filter) for RouteConfig.CACHE_TTL_S seconds.

When feature data changes, update_features() builds a new graph and clears
the cache. Callers still holding the previous graph keep a valid, unchanged
snapshot.

Cache reads, writes and clears are serialized by a lock; route searches run
outside it.
"""

import logging
import threading
import time
from typing import Callable, Iterable, Optional

from cachetools import TTLCache

from skiresort_navigator.builders.graph_builder import GraphBuilder
from skiresort_navigator.constants import RouteConfig
from skiresort_navigator.model.difficulty import Difficulty
from skiresort_navigator.model.features import LiftFeature, PisteFeature
from skiresort_navigator.model.nav_graph import NavGraph
from skiresort_navigator.model.node import Node
from skiresort_navigator.model.route import Location, Route
from skiresort_navigator.routing.path_finder import find_route

logger = logging.getLogger(__name__)

RouteKey = tuple[str, str, tuple[str, ...]]

_MISSING = object()


class RoutePlanner:
    """Route queries over a ski area's navigation graph.

    Example:
        planner = RoutePlanner(pistes=pistes, lifts=lifts)
        route = planner.plan(
            from_id="piste_top-p1",
            to_id="piste_bottom-p2",
            difficulties={Difficulty.EASY, Difficulty.EXPERT},
        )
        if route is None:
            print("No route - try enabling more difficulty levels")
    """

    def __init__(
        self,
        pistes: Iterable[PisteFeature],
        lifts: Iterable[LiftFeature],
        builder: Optional[GraphBuilder] = None,
        cache_maxsize: int = RouteConfig.CACHE_MAXSIZE,
        cache_ttl_s: float = RouteConfig.CACHE_TTL_S,
        cache_timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Build the initial graph.

        Args:
            pistes: Piste features
            lifts: Lift features
            builder: Graph builder to use (default settings if None)
            cache_maxsize: Maximum number of cached route results
            cache_ttl_s: Seconds a cached result stays valid
            cache_timer: Clock for cache expiry (seconds)
        """
        self.builder = builder or GraphBuilder()
        self._cache: TTLCache = TTLCache(maxsize=cache_maxsize, ttl=cache_ttl_s, timer=cache_timer)
        self._cache_lock = threading.Lock()
        self._pistes = tuple(pistes)
        self._lifts = tuple(lifts)
        self._graph = self.builder.build(pistes=self._pistes, lifts=self._lifts)

    @property
    def graph(self) -> NavGraph:
        """Current graph snapshot."""
        return self._graph

    def update_features(self, pistes: Iterable[PisteFeature], lifts: Iterable[LiftFeature]) -> bool:
        """Replace feature data, rebuilding the graph if anything changed.

        Args:
            pistes: New piste features
            lifts: New lift features

        Returns:
            True if the graph was rebuilt.
        """
        new_pistes = tuple(pistes)
        new_lifts = tuple(lifts)
        if new_pistes == self._pistes and new_lifts == self._lifts:
            return False

        graph = self.builder.build(pistes=new_pistes, lifts=new_lifts)
        with self._cache_lock:
            self._pistes = new_pistes
            self._lifts = new_lifts
            self._graph = graph
            self._cache.clear()
        logger.info(f"Feature data changed, graph rebuilt: {graph}")
        return True

    @staticmethod
    def _cache_key(from_id: str, to_id: str, difficulties: frozenset[Difficulty]) -> RouteKey:
        return (from_id, to_id, tuple(sorted(d.value for d in difficulties)))

    def _lookup(self, key: RouteKey) -> object:
        """Cached route (possibly None) or _MISSING, reading the expiry clock once."""
        try:
            return self._cache[key]
        except KeyError:
            return _MISSING

    def plan(
        self,
        from_id: str,
        to_id: str,
        difficulties: Optional[Iterable[Difficulty]] = None,
    ) -> Optional[Route]:
        """Route between two node IDs.

        Args:
            from_id: Origin node ID
            to_id: Destination node ID
            difficulties: Admissible piste difficulties (all if None)

        Returns:
            Route, or None if there is no admissible route or a node ID is unknown.
        """
        allowed = Difficulty.all() if difficulties is None else frozenset(difficulties)
        key = self._cache_key(from_id=from_id, to_id=to_id, difficulties=allowed)
        with self._cache_lock:
            cached = self._lookup(key)
            graph = self._graph
        if cached is not _MISSING:
            return cached

        from_node = graph.find_node(from_id)
        to_node = graph.find_node(to_id)
        if from_node is None or to_node is None:
            route = None
        else:
            route = find_route(
                graph=graph,
                from_location=Location.from_node(from_node),
                to_location=Location.from_node(to_node),
                difficulties=allowed,
            )

        with self._cache_lock:
            # A rebuild during the search makes the result stale
            if graph is self._graph:
                self._cache[key] = route
        return route

    def plan_from_coordinates(
        self,
        from_lat: float,
        from_lon: float,
        to_lat: float,
        to_lon: float,
        difficulties: Optional[Iterable[Difficulty]] = None,
    ) -> Optional[Route]:
        """Route between the nodes closest to two coordinates.

        Returns:
            Route, or None if the graph is empty or no admissible route exists.
        """
        from_node = self._graph.find_closest_node(lat=from_lat, lon=from_lon)
        to_node = self._graph.find_closest_node(lat=to_lat, lon=to_lon)
        if from_node is None or to_node is None:
            return None
        return self.plan(from_id=from_node.id, to_id=to_node.id, difficulties=difficulties)

    def search_locations(self, query: str, limit: Optional[int] = None) -> list[Location]:
        """Find nodes whose name contains the query (case-insensitive).

        Args:
            query: Search text; blank returns nothing
            limit: Maximum number of results

        Returns:
            Matching locations sorted by name, then ID.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        matches: list[Node] = sorted(
            (node for node in self._graph.nodes.values() if needle in node.name.lower()),
            key=lambda node: (node.name, node.id),
        )
        if limit is not None:
            matches = matches[:limit]
        return [Location.from_node(node) for node in matches]
