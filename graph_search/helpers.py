from typing import Dict, List, Optional
from datetime import datetime, timezone
import logging
import random

from graph_search import config
from graph_search.algo_funcs import run_search
from graph_search.graph_store import GraphStore, NodeId
from graph_search.models import *

logger = logging.getLogger(__name__)

# -----------------------------
# Graph building
# -----------------------------

def random_position(rng: Optional[random.Random] = None) -> Position:
    """Random point on the canvas, keeping CANVAS_MARGIN clear of every border."""
    rng = rng or random
    return Position(
        x=rng.random() * (config.CANVAS_WIDTH - 2 * config.CANVAS_MARGIN) + config.CANVAS_MARGIN,
        y=rng.random() * (config.CANVAS_HEIGHT - 2 * config.CANVAS_MARGIN) + config.CANVAS_MARGIN,
    )


def add_edge(graph: GraphStore, from_: str, to: str, cost: float) -> None:
    """
    - inserts the edge in both directions
    - gives each node seen for the first time a random canvas position
    - records the insertion in the event log
    """
    positions: Dict[str, Position] = STATE["positions"]
    graph.add_edge(NodeId(from_), NodeId(to), cost)

    for node in (from_, to):
        if node not in positions:
            positions[node] = random_position()
            log_event("node_created", {"node": node, "x": positions[node].x, "y": positions[node].y})

    log_event("edge_added", {"from": from_, "to": to, "cost": cost})
    logger.info("edge %s <-> %s added (cost=%s)", from_, to, cost)


def graph_snapshot(graph: GraphStore) -> GraphSnapshot:
    return GraphSnapshot(
        nodes=list(graph.nodes()),
        edges=[Edge(from_=a, to=b, cost=c) for a, b, c in graph.edges()],
        adjacency={
            node: [Neighbor(node=n, cost=c) for n, c in adj]
            for node, adj in graph.adjacency().items()
        },
        positions=dict(STATE["positions"]),
    )

# -----------------------------
# Searching
# -----------------------------

def describe_result(kind: SearchKind, result: SearchResult) -> str:
    if not result.found:
        return "No Path Found"
    return f"{SearchKind(kind).value} Path: {' -> '.join(result.path)}\nCost: {_format_cost(result.total_cost)}"


def _format_cost(cost: float) -> str:
    # 2.0 -> "2", 2.5 -> "2.5"
    return str(int(cost)) if float(cost).is_integer() else str(cost)


def search(graph: GraphStore, kind: SearchKind, start: str, goal: str) -> SearchResponse:
    result = run_search(kind, graph, NodeId(start), NodeId(goal))
    response = SearchResponse(
        kind=kind,
        start=start,
        goal=goal,
        path=result.path,
        total_cost=result.total_cost,
        found=result.found,
        message=describe_result(kind, result),
    )
    log_event("search_completed", {
        "kind": response.kind.value,
        "start": start,
        "goal": goal,
        "path": result.path,
        "total_cost": result.total_cost,
    })
    return response

# -----------------------------
# Event log
# -----------------------------

def log_event(type_: str, detail: dict):
    events: List[Event] = STATE["events"]
    events.append(Event(time=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"), type=type_, detail=detail))
    if len(events) > config.EVENT_LOG_LIMIT:
        del events[: len(events) - config.EVENT_LOG_LIMIT]
