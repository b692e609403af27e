"""Shared fixtures: graphs and a manual timer that only fires when told to."""

import pytest

from graph import Graph, build_from_user_input


class ManualTimer:
    """Stands in for RepeatingTimer; `fire()` runs one tick by hand."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # a real timer may deliver one tick that was already in flight
        self.callback()


class TimerSpy:
    """Timer factory that remembers every timer it built."""

    def __init__(self):
        self.timers = []

    def __call__(self, interval, callback):
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self):
        return [t for t in self.timers if t.started and not t.cancelled]

    @property
    def latest(self):
        return self.timers[-1]


@pytest.fixture
def timers():
    return TimerSpy()


@pytest.fixture
def default_graph():
    return Graph.generate_default()


@pytest.fixture
def empty_graph():
    return Graph.empty()


@pytest.fixture
def disconnected_graph():
    # X is unreachable from A
    return build_from_user_input(["A", "B", "C", "X"], [("A", "B"), ("B", "C")])
