from typing import Any, Callable, Dict, List, NamedTuple, Optional
from collections import deque
from itertools import count
import heapq
import logging

from graph_search.graph_store import GraphStore, NodeId
from graph_search.models import SearchKind, SearchResult

logger = logging.getLogger(__name__)

# -----------------------------
# Priority Queue
# -----------------------------

class QueueEntry(NamedTuple):
    payload: Any
    priority: float


class PriorityQueue:
    """
    Min-priority queue; entries with equal priority come out in arrival order.
    """

    def __init__(self) -> None:
        # (priority, sequence, payload); sequence breaks ties FIFO and keeps payloads out of comparisons
        self._heap: List[tuple] = []
        self._sequence = count()

    def enqueue(self, payload: Any, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._sequence), payload))

    def dequeue(self) -> Optional[QueueEntry]:
        if not self._heap:
            return None
        priority, _, payload = heapq.heappop(self._heap)
        return QueueEntry(payload, priority)

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

# -----------------------------
# Uninformed search
# -----------------------------

def _not_found() -> SearchResult:
    return SearchResult(path=[], total_cost=0)


def bfs(graph: GraphStore, start: NodeId, goal: NodeId) -> SearchResult:
    """
    Breadth-first search over partial paths.

    A node is marked visited when it is expanded, so it may sit in the
    frontier several times. The returned path has the fewest edges; its cost
    is recomputed from the graph afterwards.
    """
    queue = deque([[start]])
    visited = set()

    while queue:
        path = queue.popleft()
        node = path[-1]
        if node == goal:
            return SearchResult(path=path, total_cost=graph.total_cost(path))
        if node in visited:
            continue
        visited.add(node)
        for neighbor, _ in graph.neighbors(node):
            if neighbor not in visited:
                queue.append(path + [neighbor])

    return _not_found()


def dfs(graph: GraphStore, start: NodeId, goal: NodeId) -> SearchResult:
    """
    Depth-first search with the same visited discipline as bfs.

    Neighbors are pushed in listed order, so the last-listed one is explored first.
    """
    stack = [[start]]
    visited = set()

    while stack:
        path = stack.pop()
        node = path[-1]
        if node == goal:
            return SearchResult(path=path, total_cost=graph.total_cost(path))
        if node in visited:
            continue
        visited.add(node)
        for neighbor, _ in graph.neighbors(node):
            if neighbor not in visited:
                stack.append(path + [neighbor])

    return _not_found()


def ucs(graph: GraphStore, start: NodeId, goal: NodeId) -> SearchResult:
    """
    Uniform-cost search ordered by accumulated path cost.

    The goal check happens on dequeue, before the node is marked visited.
    Optimal only when every edge cost is non-negative; each node is expanded
    at most once either way.
    """
    visited = set()
    frontier = PriorityQueue()
    frontier.enqueue((start, [start], 0), 0)

    while not frontier.is_empty():
        node, path, cost = frontier.dequeue().payload
        if node == goal:
            return SearchResult(path=path, total_cost=cost)
        if node in visited:
            continue  # stale entry
        visited.add(node)
        for neighbor, edge_cost in graph.neighbors(node):
            if neighbor not in visited:
                new_cost = cost + edge_cost
                frontier.enqueue((neighbor, path + [neighbor], new_cost), new_cost)

    return _not_found()


SEARCHES: Dict[SearchKind, Callable[[GraphStore, NodeId, NodeId], SearchResult]] = {
    SearchKind.BFS: bfs,
    SearchKind.DFS: dfs,
    SearchKind.UCS: ucs,
}


def run_search(kind: SearchKind, graph: GraphStore, start: NodeId, goal: NodeId) -> SearchResult:
    try:
        kind = SearchKind(kind)
    except ValueError:
        raise ValueError(f"Unknown search kind: {kind!r}") from None

    result = SEARCHES[kind](graph, start, goal)
    if result.found:
        logger.info("%s %s -> %s: %s (cost=%s)", kind.value, start, goal,
                    " -> ".join(result.path), result.total_cost)
    else:
        logger.info("%s %s -> %s: no path", kind.value, start, goal)
    return result
