"""
Data models for the model relationship graph.
"""
from .api import (
    GraphStatsResponse,
    ModelNeighborsResponse,
    ModelRelationshipEntry,
    ModelRelationshipsResponse,
    RelationshipListResponse,
    SeedResponse,
)
from .graph import CytoscapeGraph, GraphEdge, GraphExport, GraphMetadata, GraphNode
from .relationship import (
    Direction,
    LiteratureSupport,
    PersistedRelationship,
    RelationshipCandidate,
    ReviewStatus,
    normalize_code,
)
from .seed import SeedFailure, SeedOutcome, SeedSummary

__all__ = [
    "CytoscapeGraph",
    "Direction",
    "GraphEdge",
    "GraphExport",
    "GraphMetadata",
    "GraphNode",
    "GraphStatsResponse",
    "LiteratureSupport",
    "ModelNeighborsResponse",
    "ModelRelationshipEntry",
    "ModelRelationshipsResponse",
    "PersistedRelationship",
    "RelationshipCandidate",
    "RelationshipListResponse",
    "ReviewStatus",
    "SeedFailure",
    "SeedOutcome",
    "SeedResponse",
    "SeedSummary",
    "normalize_code",
]
