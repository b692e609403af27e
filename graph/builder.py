"""
builder.py — Custom Graph Builder
==================================
Accumulates user-entered nodes and edges, then finalises a Graph with a
circular layout.

Rules (every invalid edit is a silent no-op; nothing here raises):
  - add_node    : blank labels and case-insensitive duplicates are rejected.
  - add_edge    : both labels must resolve to existing nodes; an edge that
                  already exists in EITHER direction is rejected.
  - remove_node : cascades to every edge touching the node.
  - remove_edge : by list position; out-of-range is ignored.

Rejections are reported through the return value (None / False) so a
caller that wants feedback does not have to pre-validate, but state is
never touched when an edit is rejected.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from graph.node import Node
from graph.edge import Edge
from graph.graph import Graph

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Layout constants (600 × 400 canvas)
# ---------------------------------------------------------------------------
LAYOUT_CENTER: Tuple[float, float] = (300.0, 200.0)
LAYOUT_MAX_RADIUS = 150.0
LAYOUT_BASE_RADIUS = 100.0
LAYOUT_RADIUS_PER_NODE = 5.0


# ---------------------------------------------------------------------------
# Example presets: (labels, edges as index pairs into labels)
# ---------------------------------------------------------------------------
PRESETS: Dict[str, Tuple[List[str], List[Tuple[int, int]]]] = {
    "simple": (
        ["A", "B", "C"],
        [(0, 1), (1, 2)],
    ),
    "tree": (
        ["Root", "L1", "R1", "L2", "R2"],
        [(0, 1), (0, 2), (1, 3), (1, 4)],
    ),
    "cycle": (
        ["A", "B", "C", "D"],
        [(0, 1), (1, 2), (2, 3), (3, 0)],
    ),
}


def layout_radius(node_count: int) -> float:
    return min(LAYOUT_MAX_RADIUS, LAYOUT_BASE_RADIUS + LAYOUT_RADIUS_PER_NODE * node_count)


def circular_layout(nodes: Sequence[Node]) -> List[Node]:
    """
    Place nodes evenly around a circle, starting at angle 0 and going
    counter-clockwise in insertion order.  A single node sits at the centre.
    Positions are presentation-only; they never affect traversal order.
    """
    cx, cy = LAYOUT_CENTER
    n = len(nodes)
    if n == 1:
        return [nodes[0].moved_to(cx, cy)]

    radius = layout_radius(n)
    placed = []
    for i, node in enumerate(nodes):
        angle = 2 * math.pi * i / n
        placed.append(node.moved_to(cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return placed


class GraphBuilder:
    """
    Attributes:
        nodes : list of Node in the order they were added (positions unset).
        edges : list of Edge in the order they were added.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []

    # ==================================================================
    # LOOKUP
    # ==================================================================
    def find_by_label(self, label: str) -> Optional[Node]:
        key = label.strip().lower()
        for node in self.nodes:
            if node.key == key:
                return node
        return None

    def has_edge_between(self, a: int, b: int) -> bool:
        return any(e.connects(a, b) for e in self.edges)

    def _next_id(self) -> int:
        return max((n.id for n in self.nodes), default=-1) + 1

    # ==================================================================
    # NODE EDITS
    # ==================================================================
    def add_node(self, label: str) -> Optional[Node]:
        label = (label or "").strip()
        if not label:
            logger.debug("add_node rejected: blank label")
            return None
        if self.find_by_label(label) is not None:
            logger.debug("add_node rejected: duplicate label %r", label)
            return None

        node = Node(id=self._next_id(), label=label)
        self.nodes.append(node)
        return node

    def remove_node(self, node_id: int) -> bool:
        if not any(n.id == node_id for n in self.nodes):
            logger.debug("remove_node rejected: unknown id %r", node_id)
            return False
        self.nodes = [n for n in self.nodes if n.id != node_id]
        self.edges = [e for e in self.edges if not e.touches(node_id)]
        return True

    # ==================================================================
    # EDGE EDITS
    # ==================================================================
    def add_edge(self, from_label: str, to_label: str) -> Optional[Edge]:
        if not (from_label or "").strip() or not (to_label or "").strip():
            logger.debug("add_edge rejected: blank endpoint")
            return None

        src = self.find_by_label(from_label)
        tgt = self.find_by_label(to_label)
        if src is None or tgt is None:
            logger.debug("add_edge rejected: unknown endpoint %r → %r", from_label, to_label)
            return None
        if self.has_edge_between(src.id, tgt.id):
            logger.debug("add_edge rejected: %s ↔ %s already exists", src.label, tgt.label)
            return None

        edge = Edge(source=src.id, target=tgt.id)
        self.edges.append(edge)
        return edge

    def remove_edge(self, index: int) -> bool:
        if not 0 <= index < len(self.edges):
            logger.debug("remove_edge rejected: index %r out of range", index)
            return False
        del self.edges[index]
        return True

    # ==================================================================
    # BULK
    # ==================================================================
    def load_preset(self, name: str) -> bool:
        """Replace the builder contents with a named example graph."""
        preset = PRESETS.get(name)
        if preset is None:
            logger.debug("load_preset rejected: unknown preset %r", name)
            return False

        labels, pairs = preset
        self.nodes = [Node(id=i, label=label) for i, label in enumerate(labels)]
        self.edges = [Edge(source=s, target=t) for s, t in pairs]
        return True

    def clear(self) -> None:
        self.nodes = []
        self.edges = []

    def is_empty(self) -> bool:
        return not self.nodes

    # ==================================================================
    # FINALISE
    # ==================================================================
    def finalize_layout(self) -> Graph:
        """Position the accumulated nodes on a circle and freeze them into a Graph."""
        return Graph(circular_layout(self.nodes), list(self.edges), is_default=False)

    build = finalize_layout

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [
                {**e.to_dict(), "index": i}
                for i, e in enumerate(self.edges)
            ],
        }

    def __repr__(self) -> str:
        return f"GraphBuilder(nodes={len(self.nodes)}, edges={len(self.edges)})"


# ---------------------------------------------------------------------------
# One-shot helper
# ---------------------------------------------------------------------------
def build_from_user_input(
    node_labels: Iterable[str],
    edge_label_pairs: Iterable[Tuple[str, str]] = (),
) -> Graph:
    """Feed labels and label pairs through a fresh builder and return the laid-out Graph."""
    builder = GraphBuilder()
    for label in node_labels:
        builder.add_node(label)
    for from_label, to_label in edge_label_pairs:
        builder.add_edge(from_label, to_label)
    return builder.finalize_layout()
