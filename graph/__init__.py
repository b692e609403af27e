"""
graph/
-----
Graph Model.  Public API:

    from graph import Graph, Node, Edge
    from graph import GraphBuilder, build_from_user_input, PRESETS
"""

from graph.node    import Node
from graph.edge    import Edge
from graph.graph   import Graph
from graph.builder import GraphBuilder, build_from_user_input, circular_layout, PRESETS

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphBuilder",
    "build_from_user_input",
    "circular_layout",
    "PRESETS",
]
