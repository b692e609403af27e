"""
recorder.py — Run Recorder & Metrics
=====================================
Runs one traversal to completion and computes the numbers the
complexity-analysis panel shows next to the trace.

Usage:
    rec = Recorder()
    trace, metrics = rec.record("dfs", graph)
"""

import logging
from dataclasses import asdict, dataclass
from typing import Optional, Tuple

from graph import Graph
from algorithms import get_algorithm
from algorithms.step import Trace
from exceptions import UnknownAlgorithmError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the analysis panel renders
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    nodes_visited:   int   = 0
    nodes_total:     int   = 0
    edges_total:     int   = 0
    snapshot_count:  int   = 0
    total_micros:    float = 0.0
    complexity_time: str   = ""

    @property
    def reached_all(self) -> bool:
        """True when every node was reachable from the start node."""
        return self.nodes_visited == self.nodes_total

    def to_dict(self) -> dict:
        data = asdict(self)
        data["reached_all"] = self.reached_all
        data["total_micros"] = round(self.total_micros, 3)
        return data


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        trace   : Snapshots from the last run.
        metrics : RunMetrics for the last run (None before the first run).
    """

    def __init__(self):
        self.trace:   Trace                = ()
        self.metrics: Optional[RunMetrics] = None

    def record(self, algo_key: str, graph: Graph) -> Tuple[Trace, RunMetrics]:
        info = get_algorithm(algo_key)
        if info is None:
            raise UnknownAlgorithmError(algo_key)

        logger.info("running %s on %r", info.key, graph)
        trace = info.run(graph)
        last  = trace[-1]

        self.trace   = trace
        self.metrics = RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            nodes_visited=len(last.visit_order),
            nodes_total=graph.node_count(),
            edges_total=graph.edge_count(),
            snapshot_count=len(trace),
            total_micros=last.total_micros or 0.0,
            complexity_time=info.complexity_time,
        )
        logger.info(
            "%s finished: %d snapshots, %d/%d nodes visited in %.1f µs",
            info.key, len(trace), self.metrics.nodes_visited,
            self.metrics.nodes_total, self.metrics.total_micros,
        )
        return trace, self.metrics
