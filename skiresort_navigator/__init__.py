"""Ski Resort Navigator - Route finding across a ski area's pistes and lifts.

Builds a weighted navigation graph from piste and lift features and finds
shortest routes between its nodes, restricted to the piste difficulties a
rider is willing to ski.

Modules:
    core: Foundation classes (geo calculations, proximity search)
    model: Data structures (features, Node, Edge, NavGraph, Route)
    builders: Graph construction (GraphBuilder, build_graph)
    routing: Path finding (find_path, find_route, RoutePlanner)

Example:
    from skiresort_navigator.builders import build_graph
    from skiresort_navigator.model import Difficulty
    from skiresort_navigator.routing import RoutePlanner, find_path
"""
