"""
Data models for the relationship API.
"""
from typing import Dict, List

from pydantic import BaseModel

from .relationship import PersistedRelationship
from .seed import SeedFailure


class RelationshipListResponse(BaseModel):
    """Response model for the relationship listing endpoint."""
    relationships: List[PersistedRelationship]
    total: int
    limit: int
    offset: int


class ModelRelationshipEntry(BaseModel):
    """One relationship seen from a single model's side."""
    related_model: str
    type: str
    direction: str  # incoming, outgoing or bidirectional
    confidence: float
    logical_derivation: str
    relationship_id: str


class ModelRelationshipsResponse(BaseModel):
    """Response model for the per-model endpoint."""
    model: str
    relationships: List[ModelRelationshipEntry]


class SeedResponse(BaseModel):
    """Response model for seed and import endpoints."""
    status: str
    success_count: int
    error_count: int
    created_ids: List[str]
    failures: List[SeedFailure]


class ModelNeighborsResponse(BaseModel):
    """Models reachable from one model along relationship direction."""
    model: str
    hops: int
    neighbors: Dict[str, int]  # model code -> hop distance


class GraphStatsResponse(BaseModel):
    models: int
    relationships: int
    edges: int
