"""
timer.py — Cancelable Repeating Timer
======================================
Drives auto-advance.  Fires `callback()` every `interval` seconds on a
daemon thread until `cancel()` is called.

The controller never reuses a timer: changing speed or restarting
playback cancels the old one and builds a new one through the same
factory signature, so tests can swap in a manual timer:

    timer_factory(interval_seconds, callback) -> object with start() / cancel()
"""

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class RepeatingTimer:
    """
    Attributes:
        interval : Seconds between ticks.
        callback : Zero-argument callable run on every tick.
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval  = interval
        self.callback  = callback
        self._stopped  = threading.Event()
        self._thread   = threading.Thread(target=self._run, name="playback-timer", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def active(self) -> bool:
        return self._thread.is_alive() and not self._stopped.is_set()

    def _run(self) -> None:
        # Event.wait returns True once cancelled, ending the loop
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception("playback timer callback failed; stopping timer")
                self._stopped.set()
