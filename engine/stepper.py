"""
stepper.py — Playback Controller
=================================
The PlaybackController is the ONLY object that moves through a trace.
It owns the snapshot sequence, a cursor into it, and the auto-advance
timer, and exposes a video-style seek / step / play / pause / speed API.

State machine:
    EMPTY    →  load() / play()        →  PAUSED at 0
    PAUSED   →  play()                 →  PLAYING   (unless at last index)
    PLAYING  →  pause() / jump_to_end  →  PAUSED
    PLAYING  →  (tick reaches end)     →  PAUSED at last index
    any      →  load()                 →  PAUSED at 0
    any      →  clear()                →  EMPTY

Timer discipline:
  - At most one timer exists per controller.  Arming always cancels the
    previous timer first.
  - The timer is armed only while playing AND cursor < last index, and is
    cancelled whenever playing becomes False or the trace is replaced.
  - Each arm bumps a generation counter; a tick from a cancelled timer
    that was already in flight sees a stale generation and does nothing.

Every navigation call is clamped; nothing here raises for out-of-range
input.  Calls are serialised by a lock because the timer fires on its
own thread.
"""

import logging
import math
import threading
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional

from algorithms.step import Snapshot, Trace
from engine.timer import RepeatingTimer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed bounds (milliseconds per step)
# ---------------------------------------------------------------------------
MIN_SPEED_MS     = 100
MAX_SPEED_MS     = 1000
DEFAULT_SPEED_MS = 500


def clamp_speed(ms: float) -> int:
    """Clamp into [MIN_SPEED_MS, MAX_SPEED_MS]; NaN falls back to the default."""
    if math.isnan(ms):
        return DEFAULT_SPEED_MS
    return int(round(max(MIN_SPEED_MS, min(MAX_SPEED_MS, ms))))


TraceSource  = Callable[[], Trace]
TimerFactory = Callable[[float, Callable[[], None]], Any]


# ---------------------------------------------------------------------------
# Read-only state view
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PlaybackState:
    cursor:       int  = 0
    playing:      bool = False
    speed_millis: int  = DEFAULT_SPEED_MS

    def to_dict(self) -> dict:
        return {"cursor": self.cursor, "playing": self.playing, "speed_millis": self.speed_millis}


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        trace_source  : Called by play() to compute a trace when none is loaded.
        timer_factory : Builds the auto-advance timer (see engine.timer).
        on_change     : Optional callback(Snapshot | None) fired whenever the
                        displayed snapshot changes.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        trace_source: Optional[TraceSource] = None,
        timer_factory: TimerFactory = RepeatingTimer,
        on_change: Optional[Callable[[Optional[Snapshot]], None]] = None,
        speed_millis: int = DEFAULT_SPEED_MS,
    ):
        self.trace_source  = trace_source
        self.timer_factory = timer_factory
        self.on_change     = on_change

        self._lock         = threading.RLock()
        self._trace:        Trace = ()
        self._cursor:       int   = 0
        self._playing:      bool  = False
        self._speed_millis: int   = clamp_speed(speed_millis)
        self._timer:        Any   = None
        self._generation:   int   = 0

    # ------------------------------------------------------------------
    # Trace lifecycle
    # ------------------------------------------------------------------
    def load(self, trace: Trace) -> None:
        """Replace the trace wholesale, rewind to 0 and stop playback."""
        with self._lock:
            self._set_playing(False)
            self._trace  = tuple(trace)
            self._cursor = 0
            logger.debug("loaded trace with %d snapshots", len(self._trace))
            self._notify()

    def clear(self) -> None:
        """Drop the trace entirely (next play() recomputes it)."""
        with self._lock:
            self._set_playing(False)
            self._trace  = ()
            self._cursor = 0
            self._notify()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def seek(self, index: int) -> bool:
        """Move the cursor to `index`, clamped into the trace.  Returns True if it moved."""
        with self._lock:
            if not self._trace:
                return False
            target = max(0, min(len(self._trace) - 1, int(index)))
            if target == self._cursor:
                return False
            self._cursor = target
            self._notify()
            return True

    def step_forward(self) -> bool:
        with self._lock:
            return self.seek(self._cursor + 1)

    def step_backward(self) -> bool:
        with self._lock:
            return self.seek(self._cursor - 1)

    def jump_to_start(self) -> bool:
        with self._lock:
            self._set_playing(False)
            return self.seek(0)

    def jump_to_end(self) -> bool:
        with self._lock:
            self._set_playing(False)
            return self.seek(len(self._trace) - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        with self._lock:
            if self._playing:
                return
            if not self._trace and self.trace_source is not None:
                # lazy compute on first play
                self.load(self.trace_source())
            self._set_playing(True)

    def pause(self) -> None:
        with self._lock:
            self._set_playing(False)

    def toggle_play(self) -> None:
        with self._lock:
            if self._playing:
                self.pause()
            else:
                self.play()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, ms: float) -> int:
        """Clamp to [MIN_SPEED_MS, MAX_SPEED_MS]; re-arm the timer if playing."""
        with self._lock:
            new_speed = clamp_speed(ms)
            if new_speed != self._speed_millis:
                self._speed_millis = new_speed
                if self._playing:
                    self._arm()
            return self._speed_millis

    # ------------------------------------------------------------------
    # Tick  (one auto-advance step)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Advance exactly one step if playing.  Clears `playing` once the
        last index is reached.  Returns True if the cursor moved.
        """
        with self._lock:
            if not self._playing:
                return False
            moved = self.step_forward()
            if self.is_at_end:
                self._set_playing(False)
            return moved

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.tick()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def trace(self) -> Trace:
        return self._trace

    @property
    def length(self) -> int:
        return len(self._trace)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def speed_millis(self) -> int:
        return self._speed_millis

    @property
    def current_snapshot(self) -> Optional[Snapshot]:
        if 0 <= self._cursor < len(self._trace):
            return self._trace[self._cursor]
        return None

    @property
    def is_at_start(self) -> bool:
        return self._cursor == 0

    @property
    def is_at_end(self) -> bool:
        return not self._trace or self._cursor >= len(self._trace) - 1

    @property
    def has_active_timer(self) -> bool:
        return self._timer is not None

    @property
    def state(self) -> PlaybackState:
        with self._lock:
            return PlaybackState(self._cursor, self._playing, self._speed_millis)

    def view(self) -> Dict[str, Any]:
        """Playback state, trace length, boundary flags and snapshot, read under one lock."""
        with self._lock:
            snap = self.current_snapshot
            return {
                "playback":     self.state.to_dict(),
                "trace_length": len(self._trace),
                "at_start":     self.is_at_start,
                "at_end":       self.is_at_end,
                "snapshot":     snap.to_dict() if snap else None,
            }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _set_playing(self, playing: bool) -> None:
        # nothing left to advance to: playing cannot stay on
        if playing and self.is_at_end:
            playing = False
        self._playing = playing
        if playing:
            self._arm()
        else:
            self._disarm()

    def _arm(self) -> None:
        self._disarm()
        self._generation += 1
        self._timer = self.timer_factory(
            self._speed_millis / 1000.0,
            partial(self._on_timer, self._generation),
        )
        self._timer.start()
        logger.debug("timer armed at %d ms (generation %d)", self._speed_millis, self._generation)

    def _disarm(self) -> None:
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None
        self._generation += 1
        logger.debug("timer disarmed")

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self.current_snapshot)
