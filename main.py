"""
main.py — Traversal Visualizer Flask App
=========================================
JSON API that lets an external presentation layer drive the trace engine.

Routes:
  GET    /api/state                  – current snapshot, playback state, graph, builder
  GET    /api/algorithms             – registry cards (label, pseudocode, complexity)
  POST   /api/algorithm              – select traversal            {key}
  POST   /api/run                    – compute a fresh trace now
  POST   /api/graph/node             – builder: add node           {label}
  DELETE /api/graph/node/<id>        – builder: remove node (cascades edges)
  POST   /api/graph/edge             – builder: add edge           {from, to}
  DELETE /api/graph/edge/<index>     – builder: remove edge
  POST   /api/graph/preset           – builder: load preset        {name}
  POST   /api/graph/apply            – make the builder graph current
  POST   /api/graph/default          – back to the generated default graph
  POST   /api/playback/<command>     – play | pause | toggle | reset | next | prev | start | end
  POST   /api/playback/speed         – set speed                   {ms}
  POST   /api/playback/seek          – jump to snapshot            {index}
  POST   /api/key                    – keyboard shortcut           {key}

State management:
  Each browser session gets its own VisualizerSession, kept in a
  process-local registry keyed by an id stored in the Flask session
  cookie.  The session object owns graph, trace and playback; routes
  only translate JSON into method calls and back.  The registry keeps
  at most MAX_SESSIONS sessions and evicts the least recently used.

Rejected graph edits are not errors: they answer 200 with
"accepted": false and leave state untouched.
"""

import logging
import secrets
import threading
from collections import OrderedDict
from typing import Any, Dict, Optional

from flask import Flask, current_app, jsonify, request, session

from algorithms import list_algorithms
from engine import VisualizerSession
from engine.stepper import TimerFactory
from engine.timer import RepeatingTimer
from exceptions import InvalidRequestError, VisualizerError
from logging_setup import configure_logging
from settings import Config, ENV_PREFIX

logger = logging.getLogger(__name__)

SESSION_KEY   = "visualizer_id"
EXTENSION_KEY = "traversal_sessions"

DEFAULT_MAX_SESSIONS = 256


# ---------------------------------------------------------------------------
# Session registry
# ---------------------------------------------------------------------------
class SessionRegistry:
    """
    Thread-safe map of visualizer id → VisualizerSession, least recently
    used first.  Holds at most `max_sessions`; creating one more evicts
    the oldest and closes it (stopping its playback timer).
    """

    def __init__(
        self,
        algo_key: str,
        speed_millis: int,
        timer_factory: TimerFactory,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ):
        self._sessions: "OrderedDict[str, VisualizerSession]" = OrderedDict()
        self._lock          = threading.Lock()
        self._algo_key      = algo_key
        self._speed_millis  = speed_millis
        self._timer_factory = timer_factory
        self.max_sessions   = max(1, int(max_sessions))

    def get_or_create(self, sid: str) -> VisualizerSession:
        with self._lock:
            vs = self._sessions.get(sid)
            if vs is not None:
                self._sessions.move_to_end(sid)
                return vs
            vs = VisualizerSession(
                algo_key=self._algo_key,
                speed_millis=self._speed_millis,
                timer_factory=self._timer_factory,
            )
            self._sessions[sid] = vs
            logger.info("new visualizer session %s", sid[:8])
            overflow = len(self._sessions) - self.max_sessions
            stale = list(self._sessions)[:overflow] if overflow > 0 else []
        for old in stale:
            logger.info("evicting visualizer session %s", old[:8])
            self.discard(old)
        return vs

    def discard(self, sid: str) -> None:
        with self._lock:
            vs = self._sessions.pop(sid, None)
        if vs is not None:
            vs.close()

    def __contains__(self, sid: str) -> bool:
        return sid in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


def current_session() -> VisualizerSession:
    if SESSION_KEY not in session:
        session[SESSION_KEY] = secrets.token_hex(16)
    return current_app.extensions[EXTENSION_KEY].get_or_create(session[SESSION_KEY])


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequestError("JSON body must be an object")
    return data


def _require(data: Dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise InvalidRequestError(f"Missing field: {key}")
    value = data[key]
    # bool is an int subclass; never accept it for numeric fields
    if kind in (int, float) and isinstance(value, bool):
        raise InvalidRequestError(f"Field {key} must be a number")
    if kind is float and isinstance(value, int):
        return float(value)
    if not isinstance(value, kind):
        raise InvalidRequestError(f"Field {key} must be {kind.__name__}")
    return value


def _state(vs: VisualizerSession, **extra):
    payload = vs.view()
    payload.update(extra)
    return jsonify(payload)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(
    config_object: Optional[object] = None,
    timer_factory: TimerFactory = RepeatingTimer,
) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.config.from_prefixed_env(ENV_PREFIX)

    if not app.testing:
        configure_logging(app.config["LOG_LEVEL"], app.config["STRUCTURED_LOGS"])

    app.extensions[EXTENSION_KEY] = SessionRegistry(
        algo_key=app.config["DEFAULT_ALGORITHM"],
        speed_millis=app.config["DEFAULT_SPEED_MS"],
        timer_factory=timer_factory,
        max_sessions=app.config["MAX_SESSIONS"],
    )

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------
    @app.errorhandler(VisualizerError)
    def handle_visualizer_error(err: VisualizerError):
        logger.warning("rejected request %s %s: %s", request.method, request.path, err)
        return jsonify({"error": str(err), "type": type(err).__name__}), 400

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------
    @app.route("/api/state")
    def api_state():
        return _state(current_session())

    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    # ------------------------------------------------------------------
    # Algorithm selection & run
    # ------------------------------------------------------------------
    @app.route("/api/algorithm", methods=["POST"])
    def api_algorithm():
        vs = current_session()
        vs.select_algorithm(_require(_body(), "key", str))
        return _state(vs)

    @app.route("/api/run", methods=["POST"])
    def api_run():
        vs = current_session()
        vs.run()
        return _state(vs)

    # ------------------------------------------------------------------
    # Graph builder
    # ------------------------------------------------------------------
    @app.route("/api/graph/node", methods=["POST"])
    def api_add_node():
        vs = current_session()
        node = vs.add_node(_require(_body(), "label", str))
        return _state(vs, accepted=node is not None)

    @app.route("/api/graph/node/<int:node_id>", methods=["DELETE"])
    def api_remove_node(node_id: int):
        vs = current_session()
        return _state(vs, accepted=vs.remove_node(node_id))

    @app.route("/api/graph/edge", methods=["POST"])
    def api_add_edge():
        vs = current_session()
        data = _body()
        edge = vs.add_edge(_require(data, "from", str), _require(data, "to", str))
        return _state(vs, accepted=edge is not None)

    @app.route("/api/graph/edge/<int:index>", methods=["DELETE"])
    def api_remove_edge(index: int):
        vs = current_session()
        return _state(vs, accepted=vs.remove_edge(index))

    @app.route("/api/graph/preset", methods=["POST"])
    def api_preset():
        vs = current_session()
        return _state(vs, accepted=vs.load_preset(_require(_body(), "name", str)))

    @app.route("/api/graph/apply", methods=["POST"])
    def api_apply():
        vs = current_session()
        return _state(vs, accepted=vs.apply_custom_graph())

    @app.route("/api/graph/default", methods=["POST"])
    def api_default_graph():
        vs = current_session()
        vs.reset_to_default_graph()
        return _state(vs)

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    commands = {
        "play":   VisualizerSession.play,
        "pause":  VisualizerSession.pause,
        "toggle": VisualizerSession.toggle_play,
        "reset":  VisualizerSession.reset,
        "next":   VisualizerSession.step_forward,
        "prev":   VisualizerSession.step_backward,
        "start":  VisualizerSession.jump_to_start,
        "end":    VisualizerSession.jump_to_end,
    }

    @app.route("/api/playback/speed", methods=["POST"])
    def api_speed():
        vs = current_session()
        vs.set_speed(_require(_body(), "ms", float))
        return _state(vs)

    @app.route("/api/playback/seek", methods=["POST"])
    def api_seek():
        vs = current_session()
        vs.seek(_require(_body(), "index", int))
        return _state(vs)

    @app.route("/api/playback/<command>", methods=["POST"])
    def api_playback(command: str):
        action = commands.get(command)
        if action is None:
            raise InvalidRequestError(f"Unknown playback command: {command}")
        vs = current_session()
        action(vs)
        return _state(vs)

    @app.route("/api/key", methods=["POST"])
    def api_key():
        vs = current_session()
        handled = vs.handle_key(_require(_body(), "key", str))
        return _state(vs, handled=handled)

    return app


if __name__ == "__main__":
    application = create_app()
    logger.info("Traversal visualizer listening on http://localhost:5000")
    application.run(debug=False, port=5000, threaded=True)
