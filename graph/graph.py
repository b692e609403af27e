"""
graph.py — Graph Container & Default Generator
===============================================
The graph every trace is computed against.

Responsibilities:
  1. Hold nodes & edges in insertion order   (start node = nodes[0])
  2. Adjacency queries                       (successors, get_node, label_of)
  3. The canonical 9-node example graph      (generate_default)
  4. Serialisation round-trip                (to_dict / from_dict)

Design decisions:
  - A Graph is immutable once constructed.  Snapshots keep a reference to
    it instead of a copy, so it must never change under them.  Edits go
    through GraphBuilder, which produces a brand-new Graph.
  - Edges pointing at an unknown node id are dropped at construction,
    never stored.
  - A successor index `_succ[node_id] → (target_id, …)` is built once so
    neighbour queries are O(out-degree), not O(E).
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from graph.node import Node
from graph.edge import Edge

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Canonical example: nine nodes A..I, ids 0..8
# ---------------------------------------------------------------------------
DEFAULT_NODES: List[Tuple[int, str, float, float]] = [
    (0, "A", 300, 80),
    (1, "B", 200, 160),
    (2, "C", 400, 160),
    (3, "D", 120, 240),
    (4, "E", 280, 240),
    (5, "F", 360, 240),
    (6, "G", 480, 240),
    (7, "H", 200, 320),
    (8, "I", 400, 320),
]

DEFAULT_EDGES: List[Tuple[int, int]] = [
    (0, 1), (0, 2),
    (1, 3), (1, 4),
    (2, 5), (2, 6),
    (3, 7), (4, 7),
    (5, 8), (6, 8),
    (4, 5),
]


class Graph:
    """
    Attributes:
        nodes      : tuple of Node, in insertion order.
        edges      : tuple of Edge, in insertion order (dangling edges removed).
        is_default : True for the generated canonical graph, False for user-built ones.
        _by_id     : {node_id: Node}
        _succ      : {node_id: (target_id, …)} in edge order
    """

    __slots__ = ("nodes", "edges", "is_default", "_by_id", "_succ")

    def __init__(
        self,
        nodes: Iterable[Node] = (),
        edges: Iterable[Edge] = (),
        is_default: bool = False,
    ):
        by_id: Dict[int, Node] = {}
        for node in nodes:
            # first one wins; ids must be unique
            by_id.setdefault(node.id, node)

        kept: List[Edge] = []
        for edge in edges:
            if edge.source in by_id and edge.target in by_id:
                kept.append(edge)
            else:
                logger.debug("dropping edge %r: endpoint not in graph", edge)

        succ: Dict[int, List[int]] = {nid: [] for nid in by_id}
        for edge in kept:
            succ[edge.source].append(edge.target)

        self.nodes:      Tuple[Node, ...] = tuple(by_id.values())
        self.edges:      Tuple[Edge, ...] = tuple(kept)
        self.is_default: bool             = is_default
        self._by_id:     Dict[int, Node]  = by_id
        self._succ:      Dict[int, Tuple[int, ...]] = {k: tuple(v) for k, v in succ.items()}

    # ==================================================================
    # QUERIES
    # ==================================================================
    def get_node(self, node_id: int) -> Optional[Node]:
        return self._by_id.get(node_id)

    def has_node(self, node_id: int) -> bool:
        return node_id in self._by_id

    def label_of(self, node_id: int) -> str:
        """Label for display.  Unknown ids render as their number."""
        node = self._by_id.get(node_id)
        return node.label if node else str(node_id)

    def labels_of(self, node_ids: Iterable[int]) -> List[str]:
        return [self.label_of(nid) for nid in node_ids]

    def successors(self, node_id: int) -> Tuple[int, ...]:
        """Targets of every edge whose source is `node_id`, in edge order."""
        return self._succ.get(node_id, ())

    def node_ids(self) -> List[int]:
        return [n.id for n in self.nodes]

    @property
    def start_node(self) -> Optional[Node]:
        return self.nodes[0] if self.nodes else None

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def is_empty(self) -> bool:
        return not self.nodes

    # ==================================================================
    # GENERATOR
    # ==================================================================
    @classmethod
    def generate_default(cls) -> "Graph":
        """The fixed 9-node example graph (A..I) used when nothing else is loaded."""
        nodes = [Node(id=i, label=label, x=x, y=y) for i, label, x, y in DEFAULT_NODES]
        edges = [Edge(source=s, target=t) for s, t in DEFAULT_EDGES]
        return cls(nodes, edges, is_default=True)

    @classmethod
    def empty(cls) -> "Graph":
        return cls()

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "is_default": self.is_default,
            "nodes":      [n.to_dict() for n in self.nodes],
            "edges":      [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        return cls(
            nodes=[Node.from_dict(nd) for nd in data.get("nodes", [])],
            edges=[Edge.from_dict(ed) for ed in data.get("edges", [])],
            is_default=bool(data.get("is_default", False)),
        )

    # ==================================================================
    # DUNDER
    # ==================================================================
    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Graph)
            and self.nodes == other.nodes
            and self.edges == other.edges
            and self.is_default == other.is_default
        )

    def __hash__(self) -> int:
        return hash((self.nodes, self.edges, self.is_default))

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, default={self.is_default})"
