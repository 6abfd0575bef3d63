"""
FastAPI application for the model relationship graph.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from ..config import Config, configure_logging
from ..graph import RelationshipGraph
from ..ingest import SeedPipeline, import_relationships_csv
from ..schema import (
    CytoscapeGraph,
    Direction,
    GraphExport,
    GraphStatsResponse,
    ModelNeighborsResponse,
    ModelRelationshipEntry,
    ModelRelationshipsResponse,
    PersistedRelationship,
    RelationshipCandidate,
    RelationshipListResponse,
    SeedResponse,
    SeedSummary,
    normalize_code,
)
from ..storage import (
    RelationshipStore,
    RelationshipStoreClient,
    StoreError,
    StoreErrorKind,
    create_store_engine,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Mini Model Graph", version="0.1.0")

# Global state
config: Optional[Config] = None
store: Optional[RelationshipStore] = None

_STATUS_BY_KIND = {
    StoreErrorKind.VALIDATION: 422,
    StoreErrorKind.CONSTRAINT: 422,
    StoreErrorKind.DUPLICATE: 409,
    StoreErrorKind.UNAVAILABLE: 503,
    StoreErrorKind.UNEXPECTED: 500,
}


@app.on_event("startup")
async def startup_event():
    """Initialize global state on startup."""
    global config, store

    config = Config.default()
    configure_logging(config)
    engine = create_store_engine(config.database_url, config.store_timeout_seconds)
    client = RelationshipStoreClient(engine)
    client.create_tables()
    store = RelationshipStore(client, config)
    logger.info("Relationship store ready at %s", engine.url.render_as_string(hide_password=True))


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    """Map a store failure onto an HTTP status by its kind."""
    logger.warning("%s %s failed (%s): %s", request.method, request.url.path, exc.kind.value, exc.message)
    return JSONResponse(
        status_code=_STATUS_BY_KIND.get(exc.kind, 500),
        content={
            "detail": {
                "kind": exc.kind.value,
                "message": exc.message,
                "relationship_id": exc.relationship_id,
            }
        },
    )


def get_store() -> RelationshipStore:
    if store is None:
        raise HTTPException(status_code=500, detail="Store not initialized")
    return store


def _load_graph(relationship_store: RelationshipStore) -> RelationshipGraph:
    return RelationshipGraph.from_relationships(relationship_store.all_relationships().unwrap())


def _seed_response(summary: SeedSummary) -> SeedResponse:
    return SeedResponse(
        status=summary.outcome.value,
        success_count=summary.success_count,
        error_count=summary.error_count,
        created_ids=summary.created_ids,
        failures=summary.failures,
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "mini-model-graph"}


@app.post("/relationships", response_model=PersistedRelationship, status_code=201)
def create_relationship(
    candidate: RelationshipCandidate,
    relationship_store: RelationshipStore = Depends(get_store),
):
    """
    Validate and persist one relationship.

    Returns:
        The persisted record; 409 when the id already exists
    """
    return relationship_store.create_relationship(candidate).unwrap()


@app.get("/relationships", response_model=RelationshipListResponse)
def list_relationships(
    model: Optional[str] = None,
    type: Optional[str] = None,
    status: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    relationship_store: RelationshipStore = Depends(get_store),
):
    """List relationships with optional filtering."""
    limit = limit or relationship_store.config.list_limit
    records = relationship_store.list_relationships(
        model=model,
        relationship_type=type,
        review_status=status,
        limit=limit,
        offset=offset,
    ).unwrap()
    return RelationshipListResponse(
        relationships=records,
        total=len(records),
        limit=limit,
        offset=offset,
    )


@app.get("/relationships/{relationship_id}", response_model=PersistedRelationship)
def get_relationship(
    relationship_id: str,
    relationship_store: RelationshipStore = Depends(get_store),
):
    """Get a single relationship by id."""
    record = relationship_store.get_relationship(relationship_id).unwrap()
    if record is None:
        raise HTTPException(status_code=404, detail="Relationship not found")
    return record


@app.get("/models/{code}/relationships", response_model=ModelRelationshipsResponse)
def model_relationships(
    code: str,
    relationship_store: RelationshipStore = Depends(get_store),
):
    """Relationships for one model, seen from that model's side."""
    code = normalize_code(code)
    records = relationship_store.relationships_for_model(code).unwrap()

    entries = []
    for rel in records:
        is_model_a = rel.model_a == code
        if rel.direction == Direction.BIDIRECTIONAL:
            direction = "bidirectional"
        elif (rel.direction == Direction.A_TO_B) == is_model_a:
            direction = "outgoing"
        else:
            direction = "incoming"
        entries.append(ModelRelationshipEntry(
            related_model=rel.model_b if is_model_a else rel.model_a,
            type=rel.relationship_type,
            direction=direction,
            confidence=rel.confidence,
            logical_derivation=rel.logical_derivation,
            relationship_id=rel.id,
        ))
    return ModelRelationshipsResponse(model=code, relationships=entries)


@app.get("/models/{code}/neighbors", response_model=ModelNeighborsResponse)
def model_neighbors(
    code: str,
    hops: int = Query(default=1, ge=1, le=10),
    relationship_store: RelationshipStore = Depends(get_store),
):
    """Models reachable from ``code`` within ``hops`` steps along relationship direction."""
    code = normalize_code(code)
    graph = _load_graph(relationship_store)
    return ModelNeighborsResponse(model=code, hops=hops, neighbors=graph.neighbors(code, hops=hops))


@app.get("/graph", response_model=Union[GraphExport, CytoscapeGraph])
def export_graph(
    min_confidence: Optional[float] = None,
    status: Optional[str] = None,
    format: str = Query(default="json", pattern="^(json|cytoscape)$"),
    relationship_store: RelationshipStore = Depends(get_store),
):
    """Export persisted relationships as a graph."""
    graph = _load_graph(relationship_store)
    if format == "cytoscape":
        return graph.to_cytoscape(confidence_min=min_confidence, review_status=status)
    return graph.export(confidence_min=min_confidence, review_status=status)


@app.get("/graph/stats", response_model=GraphStatsResponse)
def graph_stats(relationship_store: RelationshipStore = Depends(get_store)):
    """Model, relationship and directed edge counts."""
    return GraphStatsResponse(**_load_graph(relationship_store).get_stats())


@app.post("/seed", response_model=SeedResponse)
def seed_relationships(
    candidates: List[Dict[str, Any]],
    dry_run: bool = False,
    relationship_store: RelationshipStore = Depends(get_store),
):
    """
    Seed a batch of relationship candidates.

    Individual failures are reported in the response; they never fail the
    request as a whole.
    """
    summary = SeedPipeline(relationship_store).run(candidates, dry_run=dry_run)
    return _seed_response(summary)


@app.post("/import/csv", response_model=SeedResponse)
async def import_csv(
    request: Request,
    dry_run: bool = False,
    relationship_store: RelationshipStore = Depends(get_store),
):
    """Import relationships from a CSV request body."""
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV body must be UTF-8")
    summary = import_relationships_csv(relationship_store, text, dry_run=dry_run)
    return _seed_response(summary)


if __name__ == "__main__":
    import uvicorn
    settings = Config.default()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
