from typing import Dict, Iterator, List, NamedTuple, NewType, Sequence, Tuple

import logging

logger = logging.getLogger(__name__)

NodeId = NewType("NodeId", str)


class Adjacent(NamedTuple):
    node: NodeId
    cost: float


# -----------------------------
# Graph Store
# -----------------------------

class GraphStore:
    """
    Undirected weighted graph kept as an adjacency list.

    - every edge is stored in both directions as independent entries
    - neighbor lists keep insertion order, which drives BFS/DFS tie-breaks
    - nothing is validated: parallel edges, self-loops and negative costs are kept as given
    """

    def __init__(self) -> None:
        self._adjacency: Dict[NodeId, List[Adjacent]] = {}
        # undirected edges in insertion order, one entry per add_edge call
        self._edges: List[Tuple[NodeId, NodeId, float]] = []

    def add_edge(self, a: NodeId, b: NodeId, cost: float) -> None:
        self._adjacency.setdefault(a, []).append(Adjacent(b, cost))
        self._adjacency.setdefault(b, []).append(Adjacent(a, cost))  # bidirectional
        self._edges.append((a, b, cost))
        logger.debug("edge added %s <-> %s (cost=%s)", a, b, cost)

    def neighbors(self, node: NodeId) -> List[Adjacent]:
        # unknown nodes are isolated
        return self._adjacency.get(node, [])

    def nodes(self) -> List[NodeId]:
        return list(self._adjacency)

    def edges(self) -> Iterator[Tuple[NodeId, NodeId, float]]:
        return iter(self._edges)

    def adjacency(self) -> Dict[NodeId, List[Adjacent]]:
        """Read-only copy of the adjacency mapping (for rendering)."""
        return {node: list(adj) for node, adj in self._adjacency.items()}

    def clear(self) -> None:
        self._adjacency.clear()
        self._edges.clear()

    def total_cost(self, path: Sequence[NodeId]) -> float:
        """
        Recompute the cost of a path from the adjacency list.

        Each consecutive pair uses the first matching edge listed under the
        earlier node; a pair with no edge contributes 0.
        """
        total = 0
        for prev, node in zip(path, path[1:]):
            edge = next((e for e in self.neighbors(prev) if e.node == node), None)
            total += edge.cost if edge else 0
        return total

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)
