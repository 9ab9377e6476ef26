import random

import pytest
from graph_search.algo_funcs import PriorityQueue, bfs, dfs, ucs, run_search
from graph_search.graph_store import Adjacent, GraphStore
from graph_search.models import SearchKind

# -----------------------------
# Test Fixtures
# -----------------------------

@pytest.fixture
def triangle():
    """A-B(4), A-C(1), C-B(1), added in that order."""
    graph = GraphStore()
    graph.add_edge("A", "B", 4)
    graph.add_edge("A", "C", 1)
    graph.add_edge("C", "B", 1)
    return graph


def _simple_paths(graph, start, goal, path=None):
    """All simple paths from start to goal, by exhaustive recursion."""
    path = path or [start]
    if path[-1] == goal:
        yield list(path)
        return
    for neighbor, _ in graph.neighbors(path[-1]):
        if neighbor not in path:
            yield from _simple_paths(graph, start, goal, path + [neighbor])


def _path_cost(graph, path):
    # cheapest parallel edge for every hop
    return sum(
        min(cost for node, cost in graph.neighbors(a) if node == b)
        for a, b in zip(path, path[1:])
    )


def _random_graph(seed, n_nodes=7, n_edges=11):
    rng = random.Random(seed)
    nodes = [chr(ord("A") + i) for i in range(n_nodes)]
    graph = GraphStore()
    for _ in range(n_edges):
        a, b = rng.sample(nodes, 2)
        graph.add_edge(a, b, rng.randint(0, 9))
    return graph, nodes

# -----------------------------
# Graph Store Tests
# -----------------------------

def test_add_edge_is_symmetric(triangle):
    assert Adjacent("B", 4) in triangle.neighbors("A")
    assert Adjacent("A", 4) in triangle.neighbors("B")
    assert ("C", 1) in triangle.neighbors("A")
    assert ("A", 1) in triangle.neighbors("C")

def test_neighbors_keep_insertion_order(triangle):
    assert [n for n, _ in triangle.neighbors("A")] == ["B", "C"]
    assert [n for n, _ in triangle.neighbors("B")] == ["A", "C"]

def test_neighbors_of_unknown_node_is_empty(triangle):
    assert triangle.neighbors("Z") == []
    assert "Z" not in triangle

def test_add_edge_twice_creates_parallel_edges():
    graph = GraphStore()
    graph.add_edge("A", "B", 3)
    graph.add_edge("A", "B", 3)
    assert graph.neighbors("A") == [("B", 3), ("B", 3)]
    assert len(list(graph.edges())) == 2

def test_nodes_in_first_appearance_order(triangle):
    assert triangle.nodes() == ["A", "B", "C"]
    assert len(triangle) == 3

def test_adjacency_is_a_copy(triangle):
    adjacency = triangle.adjacency()
    adjacency["A"].append(Adjacent("Z", 0))
    assert len(triangle.neighbors("A")) == 2

# -----------------------------
# Cost Evaluator Tests
# -----------------------------

def test_total_cost_sums_consecutive_edges(triangle):
    assert triangle.total_cost(["A", "C", "B"]) == 2
    assert triangle.total_cost(["A", "B"]) == 4

def test_total_cost_missing_edge_counts_zero(triangle):
    # A-C exists (1), C-Z does not
    assert triangle.total_cost(["A", "C", "Z"]) == 1

def test_total_cost_short_paths(triangle):
    assert triangle.total_cost([]) == 0
    assert triangle.total_cost(["A"]) == 0

def test_total_cost_uses_first_listed_parallel_edge():
    graph = GraphStore()
    graph.add_edge("A", "B", 5)
    graph.add_edge("A", "B", 2)
    assert graph.total_cost(["A", "B"]) == 5

# -----------------------------
# Priority Queue Tests
# -----------------------------

def test_priority_queue_orders_by_priority_then_arrival():
    pq = PriorityQueue()
    for payload, priority in [("five", 5), ("three-a", 3), ("three-b", 3), ("one", 1)]:
        pq.enqueue(payload, priority)

    dequeued = []
    while not pq.is_empty():
        dequeued.append(pq.dequeue())

    assert [e.priority for e in dequeued] == [1, 3, 3, 5]
    assert [e.payload for e in dequeued] == ["one", "three-a", "three-b", "five"]

def test_priority_queue_dequeue_empty_returns_none():
    pq = PriorityQueue()
    assert pq.is_empty()
    assert pq.dequeue() is None

def test_priority_queue_does_not_compare_payloads():
    pq = PriorityQueue()
    pq.enqueue({"node": "A"}, 1)
    pq.enqueue({"node": "B"}, 1)
    assert len(pq) == 2
    assert pq.dequeue().payload == {"node": "A"}

# -----------------------------
# Search Tests
# -----------------------------

def test_ucs_prefers_cheaper_longer_path(triangle):
    result = ucs(triangle, "A", "B")
    assert result.path == ["A", "C", "B"]
    assert result.total_cost == 2

def test_bfs_prefers_fewer_edges(triangle):
    result = bfs(triangle, "A", "B")
    assert result.path == ["A", "B"]
    assert result.total_cost == 4

def test_dfs_explores_last_listed_neighbor_first(triangle):
    result = dfs(triangle, "A", "B")
    assert result.path == ["A", "C", "B"]
    assert result.total_cost == 2

@pytest.mark.parametrize("search", [bfs, dfs, ucs])
def test_start_equals_goal(triangle, search):
    result = search(triangle, "C", "C")
    assert result.path == ["C"]
    assert result.total_cost == 0

@pytest.mark.parametrize("search", [bfs, dfs, ucs])
def test_absent_goal_is_not_found(triangle, search):
    result = search(triangle, "A", "Z")
    assert result.path == []
    assert result.total_cost == 0
    assert not result.found

@pytest.mark.parametrize("search", [bfs, dfs, ucs])
def test_absent_start_is_not_found(triangle, search):
    assert search(triangle, "Z", "A").path == []

@pytest.mark.parametrize("search", [bfs, dfs, ucs])
def test_disconnected_components(triangle, search):
    triangle.add_edge("X", "Y", 1)
    assert search(triangle, "A", "Y").path == []
    assert search(triangle, "X", "Y").path == ["X", "Y"]

@pytest.mark.parametrize("search", [bfs, dfs, ucs])
def test_search_is_deterministic(search):
    graph, nodes = _random_graph(seed=7)
    first = [search(graph, a, b) for a in nodes for b in nodes]
    second = [search(graph, a, b) for a in nodes for b in nodes]
    assert first == second

@pytest.mark.parametrize("search", [bfs, dfs, ucs])
def test_self_loop_does_not_hang(search):
    graph = GraphStore()
    graph.add_edge("A", "A", 1)
    graph.add_edge("A", "B", 2)
    result = search(graph, "A", "B")
    assert result.path == ["A", "B"]
    assert result.total_cost == 2

def test_ucs_picks_cheaper_parallel_edge():
    graph = GraphStore()
    graph.add_edge("A", "B", 5)
    graph.add_edge("A", "B", 2)
    assert ucs(graph, "A", "B").total_cost == 2

def test_paths_have_no_repeated_nodes():
    graph, nodes = _random_graph(seed=3)
    for search in (bfs, dfs, ucs):
        for a in nodes:
            for b in nodes:
                path = search(graph, a, b).path
                assert len(path) == len(set(path))

@pytest.mark.parametrize("seed", range(5))
def test_bfs_edge_count_is_minimal(seed):
    graph, nodes = _random_graph(seed)
    for a in nodes:
        for b in nodes:
            paths = list(_simple_paths(graph, a, b))
            result = bfs(graph, a, b)
            if not paths:
                assert result.path == []
                continue
            assert len(result.path) == min(len(p) for p in paths)

@pytest.mark.parametrize("seed", range(5))
def test_ucs_cost_is_optimal(seed):
    graph, nodes = _random_graph(seed)
    for a in nodes:
        for b in nodes:
            paths = list(_simple_paths(graph, a, b))
            result = ucs(graph, a, b)
            if not paths:
                assert result.path == []
                continue
            assert result.total_cost == min(_path_cost(graph, p) for p in paths)
            # the path really has that cost along its cheapest edges
            assert _path_cost(graph, result.path) == result.total_cost

# -----------------------------
# Dispatch Tests
# -----------------------------

def test_run_search_dispatches_by_kind(triangle):
    assert run_search(SearchKind.BFS, triangle, "A", "B").path == ["A", "B"]
    assert run_search("UCS", triangle, "A", "B").path == ["A", "C", "B"]
    assert run_search("DFS", triangle, "A", "B").path == ["A", "C", "B"]

def test_run_search_unknown_kind():
    with pytest.raises(ValueError):
        run_search("ASTAR", GraphStore(), "A", "B")
