"""
step.py — Traversal Snapshot
=============================
Every traversal engine is a generator that yields Snapshot objects.
A Snapshot is a frozen-in-time picture of everything the presentation
layer needs to render one frame, without replaying earlier frames:

    • Which nodes are visited, and in what order
    • The current stack / queue contents
    • Which node is being processed right now
    • A plain-English narration of what just happened
    • Which line of pseudocode that corresponds to
    • Wall-clock timing (display only, never used for ordering)

Design decisions:
  - Snapshot is a frozen dataclass.  The engine is the only writer;
    the playback controller and the adapter are pure readers.
  - Every snapshot references the SAME Graph object.  Graphs are
    immutable, so sharing is safe and avoids a copy per step.
  - `visited` / `visit_order` are frozenset / tuple.  The builder only
    materialises new ones when a node is visited, so consecutive
    snapshots between visits share the same objects.
"""

import time
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple

from graph import Graph


# ---------------------------------------------------------------------------
# Snapshot kinds
# ---------------------------------------------------------------------------
INIT     = "init"       # frontier seeded, nothing visited yet
VISIT    = "visit"      # a node was popped / dequeued and marked visited
FRONTIER = "frontier"   # neighbours of the current node were pushed / enqueued
DONE     = "done"       # frontier exhausted


@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        graph           : The Graph this trace was computed against (shared, not copied).
        step_number     : 0-based index of this snapshot in its trace.
        kind            : One of INIT / VISIT / FRONTIER / DONE.
        frontier_kind   : "stack" (depth-first) or "queue" (breadth-first).
        visited         : Node ids visited so far.
        frontier        : Stack (bottom → top) or queue (front → back) contents.
        visit_order     : Node ids in the order they were visited (append-only across a trace).
        current         : Node being processed, or None on the initial snapshot.
        completed       : True only on the final snapshot.
        message         : Human-readable narration of this step.
        pseudocode_line : 0-based index into the engine's PSEUDOCODE.
        elapsed_micros  : Wall time since the run started.
        total_micros    : Wall time of the whole run; set on the final snapshot only.
    """

    graph:           Graph
    step_number:     int                = 0
    kind:            str                = INIT
    frontier_kind:   str                = "stack"
    visited:         FrozenSet[int]     = frozenset()
    frontier:        Tuple[int, ...]    = ()
    visit_order:     Tuple[int, ...]    = ()
    current:         Optional[int]      = None
    completed:       bool               = False
    message:         str                = ""
    pseudocode_line: int                = 0
    elapsed_micros:  float              = 0.0
    total_micros:    Optional[float]    = None

    # ------------------------------------------------------------------
    # Read-only helpers for the presentation layer
    # ------------------------------------------------------------------
    def visit_rank(self, node_id: int) -> Optional[int]:
        """1-based position of node_id in the visit order, or None."""
        try:
            return self.visit_order.index(node_id) + 1
        except ValueError:
            return None

    def in_frontier(self, node_id: int) -> bool:
        return node_id in self.frontier

    def to_dict(self) -> dict:
        g = self.graph
        return {
            "step_number":     self.step_number,
            "kind":            self.kind,
            "frontier_kind":   self.frontier_kind,
            "visited":         sorted(self.visited),
            "frontier":        list(self.frontier),
            "frontier_labels": g.labels_of(self.frontier),
            "visit_order":     list(self.visit_order),
            "visit_labels":    g.labels_of(self.visit_order),
            "current":         self.current,
            "current_label":   g.label_of(self.current) if self.current is not None else None,
            "completed":       self.completed,
            "message":         self.message,
            "pseudocode_line": self.pseudocode_line,
            "elapsed_micros":  round(self.elapsed_micros, 3),
            "total_micros":    round(self.total_micros, 3) if self.total_micros is not None else None,
        }


Trace = Tuple[Snapshot, ...]


# ---------------------------------------------------------------------------
# Builder: run-scoped scratch-pad the engines use to emit Snapshots
# ---------------------------------------------------------------------------
class SnapshotBuilder:
    """
    Tracks the per-run state that every snapshot carries (visited set,
    visit order, step counter, clock) so the engines only describe what
    changed.

    Usage inside an engine generator:
        sb = SnapshotBuilder(graph, "stack")
        yield sb.snapshot(INIT, frontier=[start], message="…")
        sb.visit(node)
        yield sb.snapshot(VISIT, frontier=stack, current=node, message="…")
        yield sb.finish(message="…")
    """

    def __init__(
        self,
        graph: Graph,
        frontier_kind: str,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.graph         = graph
        self.frontier_kind = frontier_kind
        self._clock        = clock
        self._started      = clock()
        self._step_no      = 0
        self._order:  List[int] = []
        self._visited_view:     FrozenSet[int]  = frozenset()
        self._order_view:       Tuple[int, ...] = ()

    # -- state --
    def visit(self, node_id: int) -> None:
        self._order.append(node_id)
        self._order_view   = tuple(self._order)
        self._visited_view = self._visited_view | {node_id}

    def is_visited(self, node_id: int) -> bool:
        return node_id in self._visited_view

    @property
    def visit_order(self) -> Tuple[int, ...]:
        return self._order_view

    def elapsed_micros(self) -> float:
        return (self._clock() - self._started) * 1_000_000

    def labels(self, node_ids: Iterable[int]) -> str:
        return ", ".join(self.graph.labels_of(node_ids))

    # -- emit --
    def snapshot(
        self,
        kind: str,
        frontier: Iterable[int] = (),
        current: Optional[int] = None,
        message: str = "",
        pseudocode_line: int = 0,
    ) -> Snapshot:
        snap = Snapshot(
            graph=self.graph,
            step_number=self._step_no,
            kind=kind,
            frontier_kind=self.frontier_kind,
            visited=self._visited_view,
            frontier=tuple(frontier),
            visit_order=self._order_view,
            current=current,
            completed=False,
            message=message,
            pseudocode_line=pseudocode_line,
            elapsed_micros=self.elapsed_micros(),
        )
        self._step_no += 1
        return snap

    def finish(self, message: str, pseudocode_line: int = 0) -> Snapshot:
        total = self.elapsed_micros()
        snap = Snapshot(
            graph=self.graph,
            step_number=self._step_no,
            kind=DONE,
            frontier_kind=self.frontier_kind,
            visited=self._visited_view,
            frontier=(),
            visit_order=self._order_view,
            # last visited node stays current; None only when nothing was visited
            current=self._order_view[-1] if self._order_view else None,
            completed=True,
            message=message,
            pseudocode_line=pseudocode_line,
            elapsed_micros=total,
            total_micros=total,
        )
        self._step_no += 1
        return snap
