"""
dfs.py — Depth-First Traversal
===============================
Generator-based DFS over an explicit stack (no Python recursion limit issues).

Yields a Snapshot at:
  1. Push start node onto the stack          (INIT)
  2. Pop an unvisited node  →  VISITED       (VISIT)
  3. Push its unvisited successors            (FRONTIER, only if any were pushed)
  4. Stack empty                              (DONE)

A popped node that is already visited is discarded without a snapshot.

Successors are sorted in DESCENDING id order before pushing, so the
smallest id ends up on top of the stack and is popped first.  A successor
already sitting on the stack is not pushed a second time.
"""

import logging
from typing import Generator, List

from graph import Graph
from algorithms.step import Snapshot, SnapshotBuilder, Trace, INIT, VISIT, FRONTIER

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, start):",                           # 0
    "    stack ← [start]",                              # 1
    "    visited ← {}",                                 # 2
    "    while stack is not empty:",                    # 3
    "        node ← stack.pop()",                       # 4
    "        if node in visited: continue",             # 5
    "        visited.add(node)",                        # 6
    "        for nbr in sorted(adj(node), desc):",      # 7
    "            if nbr not visited and not in stack:", # 8
    "                stack.push(nbr)",                  # 9
    "    return visit order",                           # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def iter_dfs(graph: Graph) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshot objects for every meaningful event of a depth-first
    traversal starting at graph.nodes[0].
    """

    sb    = SnapshotBuilder(graph, "stack")
    start = graph.start_node

    # --- empty graph: nothing to push ---
    if start is None:
        yield sb.snapshot(
            INIT,
            message="Initialize DFS with no starting node (graph is empty)",
            pseudocode_line=1,
        )
        yield sb.finish("DFS completed! Visit order: []", pseudocode_line=10)
        return

    stack = [start.id]

    # --- init step ---
    yield sb.snapshot(
        INIT,
        frontier=stack,
        message=f"Initialize DFS with starting node {start.label} using a stack",
        pseudocode_line=1,
    )

    # --- main loop ---
    while stack:
        node = stack.pop()

        # already visited (mark-on-pop can leave stale entries)
        if sb.is_visited(node):
            continue

        # -- pop & visit --
        sb.visit(node)
        label = graph.label_of(node)
        yield sb.snapshot(
            VISIT,
            frontier=stack,
            current=node,
            message=f"Visit node {label} - mark as visited",
            pseudocode_line=6,
        )

        # -- push successors --
        candidates = sorted(
            (nbr for nbr in graph.successors(node) if not sb.is_visited(nbr)),
            reverse=True,
        )
        pushed = []
        for nbr in candidates:
            if nbr not in stack:
                stack.append(nbr)
                pushed.append(nbr)

        if pushed:
            yield sb.snapshot(
                FRONTIER,
                frontier=stack,
                current=node,
                message=f"Added unvisited neighbors of {label} to stack: [{sb.labels(pushed)}]",
                pseudocode_line=9,
            )

    # --- exhausted ---
    order = " → ".join(graph.labels_of(sb.visit_order))
    yield sb.finish(f"DFS completed! Visit order: [{order}]", pseudocode_line=10)


def dfs(graph: Graph) -> Trace:
    """Run DFS to completion and return the whole trace."""
    trace = tuple(iter_dfs(graph))
    logger.debug("dfs: %d snapshots over %r", len(trace), graph)
    return trace
