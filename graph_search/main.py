from typing import List, Optional
from datetime import datetime, timezone
from html import escape
import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from graph_search import config
from graph_search.models import *
from graph_search.helpers import *

logger = logging.getLogger(__name__)

# -----------------------------
# App Setup
# -----------------------------

app = FastAPI(
    title="Graph Search Playground API",
    version="0.1.0",
    description=(
        "Build a weighted undirected graph edge by edge and run BFS, DFS or UCS between two nodes.\n\n"
        "Endpoints provided: /addEdge, /getGraph, /search, /events, /dashboard.\n"
        "State is in-memory and resets on restart."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# Helpers
# -----------------------------

def _require_node_names(*names: str) -> None:
    if any(not name for name in names):
        raise HTTPException(status_code=400, detail="node names must not be empty")

# -----------------------------
# Lifecycle
# -----------------------------

@app.on_event("startup")
async def reset_state() -> None:
    # Graph starts empty on every process start
    GRAPH.clear()
    STATE["positions"] = {}
    STATE["events"] = []
    logger.info("graph state reset")

# -----------------------------
# Endpoints
# -----------------------------

@app.get("/healthz")
async def healthz():
    return {"ok": True}

@app.get("/events", response_model=List[Event])
async def get_events(limit: Optional[int] = None, since: Optional[str] = None):
    """
    Retrieve events newest first, optionally limited and filtered by a 'since' timestamp (ISO 8601).
    """
    events = STATE.get("events", [])

    if since is not None:
        try:
            since_dt = datetime.fromisoformat(since.replace("Z", "+00:00"))
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid ISO 8601 timestamp for 'since'")
        if since_dt.tzinfo is None:
            since_dt = since_dt.replace(tzinfo=timezone.utc)
        events = [e for e in events if datetime.fromisoformat(e.time.replace("Z", "+00:00")) > since_dt]

    if limit is not None:
        events = events[-limit:] if limit > 0 else []

    return events[::-1]

@app.post("/addEdge", response_model=GraphSnapshot, tags=["graph"])
async def add_edge_endpoint(req: AddEdgeRequest) -> GraphSnapshot:
    _require_node_names(req.from_, req.to)
    add_edge(GRAPH, req.from_, req.to, req.cost)
    return graph_snapshot(GRAPH)

@app.get("/getGraph", response_model=GraphSnapshot, tags=["graph"])
async def get_graph() -> GraphSnapshot:
    return graph_snapshot(GRAPH)

@app.post("/search", response_model=SearchResponse, tags=["search"])
async def search_endpoint(req: SearchRequest) -> SearchResponse:
    _require_node_names(req.start, req.goal)
    return search(GRAPH, req.kind, req.start, req.goal)

@app.get("/search/{kind}", response_model=SearchResponse, tags=["search"])
async def search_by_kind(kind: SearchKind, start: str, goal: str) -> SearchResponse:
    start, goal = normalize_node(start), normalize_node(goal)
    _require_node_names(start, goal)
    return search(GRAPH, kind, start, goal)


@app.get("/dashboard", response_class=HTMLResponse)
async def dashboard() -> str:
    """
    Display the graph and the most recent searches.

    Returns:
        HTML page with an SVG drawing of every node and edge (edges labelled with their cost)
    """
    positions = STATE["positions"]
    searches = [e for e in STATE["events"] if e.type == "search_completed"][-10:][::-1]

    # Edges on the most recent successful path are highlighted
    last_path: List[str] = next((e.detail["path"] for e in searches if e.detail["path"]), [])
    path_pairs = set()
    for a, b in zip(last_path, last_path[1:]):
        path_pairs.add((a, b))
        path_pairs.add((b, a))

    html = """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Graph Search Playground</title>
        <style>
            .dashboard { font-family: Arial, sans-serif; margin: 20px; }
            .container { display: flex; gap: 30px; margin-bottom: 30px; }
            .map-section { flex: 2; }
            .status-section { flex: 1; }
            .svg-map { border: 1px solid #ccc; background: #f9f9f9; }
            .node { fill: #ffffff; stroke: #333; stroke-width: 2; }
            .node-text { font-size: 14px; font-weight: bold; fill: #333; text-anchor: middle; }
            .edge { stroke: #666; stroke-width: 2; }
            .edge.on-path { stroke: #FF5722; stroke-width: 4; }
            .edge-text { font-size: 12px; fill: #333; }
            ul { list-style-type: none; padding: 0; }
            li { margin: 8px 0; padding: 8px; background: #f5f5f5; border-radius: 4px; white-space: pre-line; }
            .found { color: #2E7D32; }
            .not-found { color: #D84315; }
        </style>
    </head>
    <body>
        <div class="dashboard">
            <h1>Graph Search Playground</h1>
            <div class="container">
                <div class="map-section">
                    <h2>Graph</h2>
    """

    html += f'<svg width="{config.CANVAS_WIDTH}" height="{config.CANVAS_HEIGHT}" class="svg-map">'

    # Draw edges first (so they appear behind nodes)
    for from_, to, cost in GRAPH.edges():
        if from_ not in positions or to not in positions:
            continue
        x1, y1 = positions[from_].x, positions[from_].y
        x2, y2 = positions[to].x, positions[to].y
        edge_class = "edge on-path" if (from_, to) in path_pairs else "edge"
        html += f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" class="{edge_class}" />'
        # Edge label (cost)
        mid_x = (x1 + x2) / 2
        mid_y = (y1 + y2) / 2
        html += f'<text x="{mid_x}" y="{mid_y - 5}" class="edge-text">{escape(str(cost))}</text>'

    # Draw nodes
    for node, pos in positions.items():
        html += f'<circle cx="{pos.x}" cy="{pos.y}" r="{config.NODE_RADIUS}" class="node" />'
        html += f'<text x="{pos.x}" y="{pos.y + 5}" class="node-text">{escape(node)}</text>'

    html += '</svg>'

    html += """
                </div>
                <div class="status-section">
                    <h2>Recent Searches</h2>
                    <ul>
    """

    for e in searches:
        detail = e.detail
        result = SearchResult(path=detail["path"], total_cost=detail["total_cost"])
        status_class = "found" if result.found else "not-found"
        header = f'{escape(detail["kind"])} {escape(detail["start"])} → {escape(detail["goal"])}'
        html += f'<li class="{status_class}"><strong>{header}</strong>\n{escape(describe_result(detail["kind"], result))}</li>'

    html += """
                    </ul>
                </div>
            </div>
        </div>
    </body>
    </html>
    """

    return html

# -----------------------------
# Run (if executed directly)
# -----------------------------

# Use: uvicorn graph_search.main:app --reload // or python -m graph_search.main
if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL)
    uvicorn.run(
        "graph_search.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.RELOAD,
    )
