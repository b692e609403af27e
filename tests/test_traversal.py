"""Tests for the depth-first and breadth-first trace engines."""

import pytest

from algorithms import REGISTRY, bfs, dfs, get_algorithm, list_algorithms
from algorithms.step import DONE, FRONTIER, INIT, VISIT
from graph import Edge, Graph, Node, build_from_user_input

ENGINES = [pytest.param(dfs, id="dfs"), pytest.param(bfs, id="bfs")]


def labels(graph, ids):
    return graph.labels_of(ids)


def timing_free(trace):
    """Everything except the wall-clock fields."""
    return [
        (s.kind, s.visited, s.frontier, s.visit_order, s.current, s.completed, s.message)
        for s in trace
    ]


# ============================================
# Scenarios on the default graph
# ============================================

class TestDefaultGraphScenarios:

    def test_dfs_visit_order(self, default_graph):
        final = dfs(default_graph)[-1]
        # smallest id ends up on top of the stack, so it is popped first
        assert labels(default_graph, final.visit_order) == ["A", "B", "D", "H", "E", "F", "I", "C", "G"]

    def test_bfs_visit_order(self, default_graph):
        final = bfs(default_graph)[-1]
        assert labels(default_graph, final.visit_order) == list("ABCDEFGHI")

    def test_dfs_snapshot_sequence(self, default_graph):
        trace = dfs(default_graph)
        kinds = [s.kind for s in trace]
        assert kinds[0] == INIT
        assert kinds[-1] == DONE
        assert kinds.count(VISIT) == 9
        # A, B, D, E, F and C push something; H, I and G do not
        assert kinds.count(FRONTIER) == 6
        assert len(trace) == 17

    def test_dfs_messages(self, default_graph):
        trace = dfs(default_graph)
        assert trace[0].message == "Initialize DFS with starting node A using a stack"
        assert trace[1].message == "Visit node A - mark as visited"
        assert trace[2].message == "Added unvisited neighbors of A to stack: [C, B]"
        assert trace[-1].message == "DFS completed! Visit order: [A → B → D → H → E → F → I → C → G]"

    def test_bfs_messages(self, default_graph):
        trace = bfs(default_graph)
        assert trace[0].message == "Initialize BFS with starting node A using a queue"
        assert trace[2].message == "Added unvisited neighbors of A to queue: [B, C]"
        assert trace[-1].message.startswith("BFS completed! Visit order: [A → B → C")

    def test_dfs_stack_contents(self, default_graph):
        trace = dfs(default_graph)
        assert trace[0].frontier == (0,)
        assert trace[1].frontier == ()          # A popped
        assert trace[2].frontier == (2, 1)      # C pushed first, B on top
        assert trace[0].frontier_kind == "stack"

    def test_bfs_skips_neighbors_already_queued(self, default_graph):
        trace = bfs(default_graph)
        e_visit = next(s for s in trace if s.kind == VISIT and s.current == 4)
        after = trace[e_visit.step_number + 1]
        # E → H and E → F are both already queued, so no frontier step follows
        assert after.kind == VISIT
        assert trace[0].frontier_kind == "queue"

    def test_dfs_does_not_push_twice(self, default_graph):
        for snap in dfs(default_graph):
            assert len(snap.frontier) == len(set(snap.frontier))


# ============================================
# Ordering rules on small graphs
# ============================================

class TestOrderingRules:

    def fan_out(self):
        # X → Z is added before X → Y, but ids decide the order
        return Graph(
            [Node(0, "X"), Node(1, "Y"), Node(2, "Z")],
            [Edge(0, 2), Edge(0, 1)],
        )

    def test_dfs_pushes_descending_and_pops_ascending(self):
        g = self.fan_out()
        trace = dfs(g)
        push = next(s for s in trace if s.kind == FRONTIER)
        assert push.frontier == (2, 1)
        assert labels(g, trace[-1].visit_order) == ["X", "Y", "Z"]

    def test_bfs_enqueues_ascending(self):
        g = self.fan_out()
        trace = bfs(g)
        push = next(s for s in trace if s.kind == FRONTIER)
        assert push.frontier == (1, 2)
        assert labels(g, trace[-1].visit_order) == ["X", "Y", "Z"]

    def test_edges_are_followed_in_one_direction_only(self):
        g = build_from_user_input(["A", "B"], [("B", "A")])
        for engine in (dfs, bfs):
            assert engine(g)[-1].visit_order == (0,)

    def test_cycle_terminates(self):
        g = build_from_user_input(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A")])
        for engine in (dfs, bfs):
            assert labels(g, engine(g)[-1].visit_order) == ["A", "B", "C"]

    def test_self_loop(self):
        g = Graph([Node(0, "A")], [Edge(0, 0)])
        trace = dfs(g)
        assert trace[-1].visit_order == (0,)
        assert [s.kind for s in trace] == [INIT, VISIT, DONE]


# ============================================
# Invariants that hold for every trace
# ============================================

@pytest.mark.parametrize("engine", ENGINES)
class TestInvariants:

    def graphs(self, default_graph, disconnected_graph):
        tree = build_from_user_input(["R", "L", "M"], [("R", "L"), ("R", "M")])
        return [default_graph, disconnected_graph, tree]

    def test_visited_matches_visit_order_at_every_index(self, engine, default_graph, disconnected_graph):
        for g in self.graphs(default_graph, disconnected_graph):
            for snap in engine(g):
                assert snap.visited == frozenset(snap.visit_order)
                assert len(snap.visit_order) == len(snap.visited)

    def test_visit_order_only_grows(self, engine, default_graph, disconnected_graph):
        for g in self.graphs(default_graph, disconnected_graph):
            trace = engine(g)
            for prev, nxt in zip(trace, trace[1:]):
                assert nxt.visit_order[: len(prev.visit_order)] == prev.visit_order
                assert len(nxt.visit_order) - len(prev.visit_order) in (0, 1)

    def test_current_is_visited_once_set(self, engine, default_graph, disconnected_graph):
        for g in self.graphs(default_graph, disconnected_graph):
            trace = engine(g)
            assert trace[0].current is None
            for snap in trace[1:]:
                assert snap.current in snap.visited

    def test_only_reachable_nodes_visited_once(self, engine, disconnected_graph):
        order = engine(disconnected_graph)[-1].visit_order
        assert labels(disconnected_graph, order) == ["A", "B", "C"]

    def test_final_snapshot(self, engine, default_graph):
        trace = engine(default_graph)
        last = trace[-1]
        assert last.completed is True
        assert last.frontier == ()
        assert last.total_micros is not None
        assert last.total_micros == last.elapsed_micros
        assert all(not s.completed and s.total_micros is None for s in trace[:-1])

    def test_step_numbers_are_indices(self, engine, default_graph):
        trace = engine(default_graph)
        assert [s.step_number for s in trace] == list(range(len(trace)))

    def test_elapsed_time_never_decreases(self, engine, default_graph):
        trace = engine(default_graph)
        elapsed = [s.elapsed_micros for s in trace]
        assert elapsed == sorted(elapsed)

    def test_deterministic(self, engine, default_graph):
        assert timing_free(engine(default_graph)) == timing_free(engine(default_graph))

    def test_graph_is_shared_not_copied(self, engine, default_graph):
        before = default_graph.to_dict()
        trace = engine(default_graph)
        assert all(s.graph is default_graph for s in trace)
        assert default_graph.to_dict() == before

    def test_empty_graph_gives_two_snapshots(self, engine, empty_graph):
        trace = engine(empty_graph)
        assert len(trace) == 2
        assert [s.visit_order for s in trace] == [(), ()]
        assert trace[0].current is None
        assert trace[0].frontier == ()
        assert trace[1].completed is True
        assert "no starting node" in trace[0].message


# ============================================
# Registry
# ============================================

class TestRegistry:

    def test_keys(self):
        assert [a.key for a in list_algorithms()] == ["dfs", "bfs"]

    def test_lookup(self):
        assert get_algorithm("bfs").frontier_kind == "queue"
        assert get_algorithm("dijkstra") is None

    def test_run_delegates_to_engine(self, default_graph):
        assert timing_free(REGISTRY["dfs"].run(default_graph)) == timing_free(dfs(default_graph))

    def test_to_dict_exposes_pseudocode(self):
        card = REGISTRY["dfs"].to_dict()
        assert card["label"] == "Depth-First Search"
        assert card["pseudocode"][0].startswith("def DFS")
        assert card["complexity_time"] == "O(V + E)"
