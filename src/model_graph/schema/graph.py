"""
Data models for the relationship graph export.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .relationship import Direction


class GraphNode(BaseModel):
    """A mental model appearing in at least one relationship."""
    id: str
    degree: int = 0


class GraphEdge(BaseModel):
    """Represents a relation between models."""
    source: str
    target: str
    relationship_id: str
    type: str
    direction: Direction
    confidence: float
    logical_derivation: Optional[str] = None


class GraphMetadata(BaseModel):
    total_nodes: int
    total_edges: int
    confidence_filter: Optional[float] = None
    status_filter: Optional[str] = None
    generated_at: datetime


class GraphExport(BaseModel):
    """Nodes and edges for visualization."""
    nodes: List[GraphNode]
    edges: List[GraphEdge]
    metadata: GraphMetadata


class CytoscapeGraph(BaseModel):
    elements: List[Dict[str, Any]]
