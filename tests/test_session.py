"""Tests for VisualizerSession: command surface, reset semantics, key bindings."""

import pytest

from engine import KEY_BINDINGS, VisualizerSession
from exceptions import UnknownAlgorithmError
from graph import Graph


@pytest.fixture
def vs(timers):
    return VisualizerSession(timer_factory=timers)


class TestAlgorithmSelection:

    def test_defaults(self, vs):
        assert vs.algo_key == "dfs"
        assert vs.graph.is_default
        assert vs.controller.length == 0

    def test_unknown_algorithm_raises(self, vs):
        with pytest.raises(UnknownAlgorithmError):
            vs.select_algorithm("quicksort")
        assert vs.algo_key == "dfs"

    def test_unknown_default_algorithm_raises(self, timers):
        with pytest.raises(ValueError):
            VisualizerSession(algo_key="nope", timer_factory=timers)

    def test_switching_algorithm_drops_trace(self, vs):
        vs.run()
        vs.select_algorithm("bfs")
        assert vs.controller.length == 0
        vs.play()
        assert vs.controller.trace[0].frontier_kind == "queue"

    def test_reselecting_same_algorithm_keeps_trace(self, vs):
        vs.run()
        vs.step_forward()
        vs.select_algorithm("dfs")
        assert vs.controller.cursor == 1


class TestRunAndPlayback:

    def test_play_computes_trace_and_metrics(self, vs):
        vs.play()
        assert vs.controller.length == 17
        assert vs.controller.is_playing
        metrics = vs.recorder.metrics
        assert metrics.nodes_visited == 9
        assert metrics.reached_all is True
        assert metrics.snapshot_count == 17

    def test_set_speed_clamps(self, vs):
        assert vs.set_speed(50) == 100
        assert vs.set_speed(5000) == 1000

    def test_seek_and_steps(self, vs):
        vs.run()
        vs.seek(4)
        assert vs.step_backward() is True
        assert vs.controller.cursor == 3
        vs.jump_to_end()
        assert vs.controller.is_at_end


class TestGraphEditing:

    def test_edits_do_not_touch_current_graph_until_applied(self, vs):
        vs.add_node("X")
        assert vs.graph.is_default

    def test_apply_custom_graph(self, vs):
        vs.run()
        vs.load_preset("tree")
        assert vs.apply_custom_graph() is True
        assert not vs.graph.is_default
        assert [n.label for n in vs.graph.nodes] == ["Root", "L1", "R1", "L2", "R2"]
        assert vs.controller.length == 0

    def test_apply_empty_builder_is_noop(self, vs):
        vs.run()
        assert vs.apply_custom_graph() is False
        assert vs.graph.is_default
        assert vs.controller.length == 17

    def test_duplicate_node_via_session(self, vs):
        assert vs.add_node("A") is not None
        assert vs.add_node("A") is None
        assert [n.label for n in vs.builder.nodes] == ["A"]

    def test_reset_to_default_graph(self, vs):
        vs.load_preset("simple")
        vs.apply_custom_graph()
        vs.reset_to_default_graph()
        assert vs.graph == Graph.generate_default()
        assert vs.builder.is_empty()


class TestReset:

    def test_reset_on_default_graph_regenerates_it(self, vs):
        old = vs.graph
        vs.play()
        vs.reset()
        assert vs.graph is not old
        assert vs.graph == old
        assert vs.controller.length == 0
        assert vs.controller.is_playing is False
        assert vs.controller.cursor == 0

    def test_reset_on_custom_graph_keeps_it(self, vs):
        vs.load_preset("cycle")
        vs.apply_custom_graph()
        custom = vs.graph
        vs.play()
        vs.reset()
        assert vs.graph is custom
        assert vs.controller.length == 0


class TestKeyBindings:

    def test_bindings_cover_the_keyboard_policy(self):
        assert set(KEY_BINDINGS) == {" ", "ArrowRight", "ArrowLeft", "Home", "End", "r"}

    def test_space_toggles(self, vs):
        assert vs.handle_key(" ") is True
        assert vs.controller.is_playing
        vs.handle_key(" ")
        assert not vs.controller.is_playing

    def test_arrows_and_home_end(self, vs):
        vs.run()
        vs.handle_key("ArrowRight")
        vs.handle_key("ArrowRight")
        vs.handle_key("ArrowLeft")
        assert vs.controller.cursor == 1
        vs.handle_key("End")
        assert vs.controller.is_at_end
        vs.handle_key("Home")
        assert vs.controller.cursor == 0

    def test_r_resets(self, vs):
        vs.run()
        vs.handle_key("r")
        assert vs.controller.length == 0

    def test_unbound_key(self, vs):
        assert vs.handle_key("q") is False


class TestView:

    def test_view_before_run(self, vs):
        view = vs.view()
        assert view["snapshot"] is None
        assert view["trace_length"] == 0
        assert view["metrics"] is None
        assert view["algorithm"]["key"] == "dfs"

    def test_view_after_run(self, vs):
        vs.run()
        vs.seek(2)
        view = vs.view()
        assert view["playback"] == {"cursor": 2, "playing": False, "speed_millis": 500}
        assert view["snapshot"]["frontier_labels"] == ["C", "B"]
        assert view["snapshot"]["current_label"] == "A"
        assert view["at_start"] is False
        assert view["metrics"]["algo_label"] == "Depth-First Search"
