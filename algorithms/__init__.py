"""
algorithms/__init__.py — Traversal Registry
============================================
Single source of truth for every traversal the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "dfs": AlgoInfo(key, label, fn, pseudocode, frontier_kind, …),
        "bfs": AlgoInfo(…),
    }

Every `fn` has the same contract: `fn(graph) -> Trace`.  It is
deterministic, runs to completion in one call and never mutates the graph.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from graph import Graph
from algorithms.step import Snapshot, SnapshotBuilder, Trace
from algorithms.dfs  import dfs, iter_dfs, PSEUDOCODE as _dfs_pc
from algorithms.bfs  import bfs, iter_bfs, PSEUDOCODE as _bfs_pc


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each traversal
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    key:              str                          # registry key, e.g. "dfs"
    label:            str                          # e.g. "Depth-First Search"
    fn:               Callable[[Graph], Trace]     # the engine
    pseudocode:       List[str]                    # lines for the code panel
    frontier_kind:    str                          # "stack" | "queue"
    complexity_time:  str = "O(V + E)"
    complexity_space: str = "O(V)"
    description:      str = ""
    difficulty:       str = "Intermediate"

    def run(self, graph: Graph) -> Trace:
        return self.fn(graph)

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "pseudocode":       list(self.pseudocode),
            "frontier_kind":    self.frontier_kind,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
            "difficulty":       self.difficulty,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=dfs, pseudocode=_dfs_pc,
        frontier_kind="stack",
        description="Explores graph by going as deep as possible before backtracking",
    ),

    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=bfs, pseudocode=_bfs_pc,
        frontier_kind="queue",
        description="Explores graph level by level using a queue",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered traversals in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "Snapshot",
    "SnapshotBuilder",
    "Trace",
    "dfs",
    "bfs",
    "iter_dfs",
    "iter_bfs",
    "get_algorithm",
    "list_algorithms",
]
