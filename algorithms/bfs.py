"""
bfs.py — Breadth-First Traversal
=================================
Generator-based BFS over an explicit FIFO queue.

Yields a Snapshot at:
  1. Enqueue start node                       (INIT)
  2. Dequeue an unvisited node  →  VISITED    (VISIT)
  3. Enqueue its newly discovered successors  (FRONTIER, only if any)
  4. Queue empty                              (DONE)

Successors are enqueued in ASCENDING id order.  A successor that is
already visited or already waiting in the queue is skipped, so each
node enters the queue at most once.
"""

import logging
from collections import deque
from typing import Generator, List

from graph import Graph
from algorithms.step import Snapshot, SnapshotBuilder, Trace, INIT, VISIT, FRONTIER

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode: each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, start):",                           # 0
    "    queue ← [start]",                              # 1
    "    visited ← {}",                                 # 2
    "    while queue is not empty:",                    # 3
    "        node ← queue.dequeue()",                   # 4
    "        if node in visited: continue",             # 5
    "        visited.add(node)",                        # 6
    "        for nbr in sorted(adj(node)):",            # 7
    "            if nbr not visited and not queued:",   # 8
    "                queue.enqueue(nbr)",               # 9
    "    return visit order",                           # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def iter_bfs(graph: Graph) -> Generator[Snapshot, None, None]:
    """
    Yields Snapshot objects for every meaningful event of a breadth-first
    traversal starting at graph.nodes[0].
    """

    sb    = SnapshotBuilder(graph, "queue")
    start = graph.start_node

    if start is None:
        yield sb.snapshot(
            INIT,
            message="Initialize BFS with no starting node (graph is empty)",
            pseudocode_line=1,
        )
        yield sb.finish("BFS completed! Visit order: []", pseudocode_line=10)
        return

    queue = deque([start.id])

    # --- initialisation step ---
    yield sb.snapshot(
        INIT,
        frontier=queue,
        message=f"Initialize BFS with starting node {start.label} using a queue",
        pseudocode_line=1,
    )

    # --- main loop ---
    while queue:
        node = queue.popleft()

        if sb.is_visited(node):
            continue

        # -- dequeue & visit --
        sb.visit(node)
        label = graph.label_of(node)
        yield sb.snapshot(
            VISIT,
            frontier=queue,
            current=node,
            message=f"Visit node {label} - mark as visited",
            pseudocode_line=6,
        )

        # -- enqueue successors --
        discovered = sorted(
            nbr for nbr in set(graph.successors(node))
            if not sb.is_visited(nbr) and nbr not in queue
        )
        queue.extend(discovered)

        if discovered:
            yield sb.snapshot(
                FRONTIER,
                frontier=queue,
                current=node,
                message=f"Added unvisited neighbors of {label} to queue: [{sb.labels(discovered)}]",
                pseudocode_line=9,
            )

    # --- exhausted ---
    order = " → ".join(graph.labels_of(sb.visit_order))
    yield sb.finish(f"BFS completed! Visit order: [{order}]", pseudocode_line=10)


def bfs(graph: Graph) -> Trace:
    """Run BFS to completion and return the whole trace."""
    trace = tuple(iter_bfs(graph))
    logger.debug("bfs: %d snapshots over %r", len(trace), graph)
    return trace
