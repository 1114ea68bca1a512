"""Graph construction from piste and lift features.

Provides GraphBuilder and the build_graph() shortcut:
- Piste descents weighted by distance and difficulty
- Lift ascents with a fixed weight
- Walking connections between nearby features
"""

from skiresort_navigator.builders.graph_builder import GraphBuilder, build_graph

__all__ = [
    "GraphBuilder",
    "build_graph",
]
