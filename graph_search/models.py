from typing import Annotated, List, Dict
from enum import Enum

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from graph_search.graph_store import GraphStore

# -----------------------------
# Domain Models (Pydantic)
# -----------------------------

class SearchKind(str, Enum):
    BFS = "BFS"
    DFS = "DFS"
    UCS = "UCS"

class Position(BaseModel):
    x: float
    y: float

class Edge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    cost: float

class SearchResult(BaseModel):
    """Outcome of a single search; an empty path means no path was found."""
    model_config = ConfigDict(populate_by_name=True)

    path: List[str] = Field(default_factory=list)
    total_cost: float = Field(0, alias="totalCost")

    @property
    def found(self) -> bool:
        return bool(self.path)

class Neighbor(BaseModel):
    node: str
    cost: float

class GraphSnapshot(BaseModel):
    nodes: List[str]
    edges: List[Edge]
    adjacency: Dict[str, List[Neighbor]]
    positions: Dict[str, Position]

class Event(BaseModel):
    time: str
    type: str
    detail: dict

# -----------------------------
# API Schemas
# -----------------------------

def normalize_node(value: str) -> str:
    # node names are case-insensitive; the form uppercases them on entry
    return value.strip().upper()

NodeName = Annotated[str, AfterValidator(normalize_node)]

class AddEdgeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: NodeName = Field(alias="from")
    to: NodeName
    cost: float

class SearchRequest(BaseModel):
    kind: SearchKind
    start: NodeName
    goal: NodeName

class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: SearchKind
    start: str
    goal: str
    path: List[str]
    total_cost: float = Field(alias="totalCost")
    found: bool
    message: str

# -----------------------------
# In-memory State (lives for the process lifetime)
# -----------------------------

GRAPH: GraphStore = GraphStore()

STATE: Dict[str, object] = {
    "positions": {},  # node -> Position, assigned once on first appearance
    "events": [],
}
