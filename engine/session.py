"""
session.py — Visualizer Session
================================
One user's worth of state: the selected traversal, the graph it runs
on, the custom-graph builder, and the playback controller that owns
the trace.  The presentation layer holds a reference to a session and
sends it commands; it never keeps its own copy of any of this.

Any change to the algorithm or the graph throws the current trace away.
The next play() (or run()) computes a fresh one from scratch.
"""

import logging
from typing import Any, Callable, Dict, Optional

from graph import Graph, GraphBuilder, Node, Edge
from algorithms import AlgoInfo, get_algorithm
from algorithms.step import Trace
from engine.recorder import Recorder, RunMetrics
from engine.stepper import PlaybackController, TimerFactory, DEFAULT_SPEED_MS
from engine.timer import RepeatingTimer
from exceptions import UnknownAlgorithmError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Keyboard policy: key (as reported by the browser) → session method
# ---------------------------------------------------------------------------
KEY_BINDINGS: Dict[str, str] = {
    " ":          "toggle_play",
    "ArrowRight": "step_forward",
    "ArrowLeft":  "step_backward",
    "Home":       "jump_to_start",
    "End":        "jump_to_end",
    "r":          "reset",
}


class VisualizerSession:
    """
    Attributes:
        algo_key   : Registry key of the selected traversal.
        graph      : Graph the next trace will be computed against.
        builder    : Custom-graph builder (edits here do not touch `graph`
                     until apply_custom_graph()).
        controller : PlaybackController owning the current trace.
        recorder   : Recorder holding metrics of the last run.
    """

    def __init__(
        self,
        algo_key: str = "dfs",
        speed_millis: int = DEFAULT_SPEED_MS,
        timer_factory: TimerFactory = RepeatingTimer,
        on_change: Optional[Callable] = None,
    ):
        if get_algorithm(algo_key) is None:
            raise UnknownAlgorithmError(algo_key)

        self.algo_key:   str           = algo_key
        self.graph:      Graph         = Graph.generate_default()
        self.builder:    GraphBuilder  = GraphBuilder()
        self.recorder:   Recorder      = Recorder()
        self.controller: PlaybackController = PlaybackController(
            trace_source=self._compute_trace,
            timer_factory=timer_factory,
            on_change=on_change,
            speed_millis=speed_millis,
        )

    # ------------------------------------------------------------------
    # Algorithm selection
    # ------------------------------------------------------------------
    @property
    def algorithm(self) -> AlgoInfo:
        return get_algorithm(self.algo_key)

    def select_algorithm(self, key: str) -> None:
        if get_algorithm(key) is None:
            raise UnknownAlgorithmError(key)
        if key != self.algo_key:
            self.algo_key = key
            self._invalidate_trace()

    # ------------------------------------------------------------------
    # Graph editing (delegates to the builder; invalid edits are no-ops)
    # ------------------------------------------------------------------
    def add_node(self, label: str) -> Optional[Node]:
        return self.builder.add_node(label)

    def remove_node(self, node_id: int) -> bool:
        return self.builder.remove_node(node_id)

    def add_edge(self, from_label: str, to_label: str) -> Optional[Edge]:
        return self.builder.add_edge(from_label, to_label)

    def remove_edge(self, index: int) -> bool:
        return self.builder.remove_edge(index)

    def load_preset(self, name: str) -> bool:
        return self.builder.load_preset(name)

    def apply_custom_graph(self) -> bool:
        """Lay out the builder's nodes and make them the current graph."""
        if self.builder.is_empty():
            logger.debug("apply_custom_graph ignored: builder is empty")
            return False
        self.graph = self.builder.finalize_layout()
        self._invalidate_trace()
        logger.info("custom graph applied: %r", self.graph)
        return True

    def reset_to_default_graph(self) -> None:
        self.builder.clear()
        self.graph = Graph.generate_default()
        self._invalidate_trace()

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------
    def run(self) -> Trace:
        """Compute a fresh trace for the current graph and load it."""
        trace = self._compute_trace()
        self.controller.load(trace)
        return trace

    def _compute_trace(self) -> Trace:
        trace, _ = self.recorder.record(self.algo_key, self.graph)
        return trace

    def _invalidate_trace(self) -> None:
        self.controller.clear()
        self.recorder.metrics = None

    # ------------------------------------------------------------------
    # Playback commands
    # ------------------------------------------------------------------
    def play(self) -> None:
        self.controller.play()

    def pause(self) -> None:
        self.controller.pause()

    def toggle_play(self) -> None:
        self.controller.toggle_play()

    def step_forward(self) -> bool:
        return self.controller.step_forward()

    def step_backward(self) -> bool:
        return self.controller.step_backward()

    def jump_to_start(self) -> bool:
        return self.controller.jump_to_start()

    def jump_to_end(self) -> bool:
        return self.controller.jump_to_end()

    def seek(self, index: int) -> bool:
        return self.controller.seek(index)

    def set_speed(self, ms: float) -> int:
        return self.controller.set_speed(ms)

    def reset(self) -> None:
        """Drop the trace and stop; regenerate the graph if it is the default one."""
        self._invalidate_trace()
        if self.graph.is_default:
            self.graph = Graph.generate_default()

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def handle_key(self, key: str) -> bool:
        """Dispatch a key press.  Returns False for unbound keys."""
        action = KEY_BINDINGS.get(key)
        if action is None:
            return False
        getattr(self, action)()
        return True

    # ------------------------------------------------------------------
    # Output surface
    # ------------------------------------------------------------------
    def view(self) -> Dict[str, Any]:
        metrics: Optional[RunMetrics] = self.recorder.metrics
        payload = {
            "algorithm": self.algorithm.to_dict(),
            "graph":     self.graph.to_dict(),
            "builder":   self.builder.to_dict(),
        }
        payload.update(self.controller.view())
        payload["metrics"] = metrics.to_dict() if metrics else None
        return payload

    def close(self) -> None:
        """Stop playback and release the timer."""
        self.controller.pause()
