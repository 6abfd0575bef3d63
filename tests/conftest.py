"""
Shared fixtures: an in-memory relationship store and a candidate factory.
"""
from datetime import datetime, timezone

import pytest

from model_graph.config import Config
from model_graph.storage import RelationshipStore, RelationshipStoreClient, create_store_engine


@pytest.fixture
def config():
    return Config(database_url="sqlite://", store_timeout_seconds=1.0)


@pytest.fixture
def engine(config):
    engine = create_store_engine(config.database_url, config.store_timeout_seconds)
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine):
    client = RelationshipStoreClient(engine)
    client.create_tables()
    return client


@pytest.fixture
def store(client, config):
    return RelationshipStore(client, config)


@pytest.fixture
def make_candidate():
    """Build a valid candidate mapping, overriding any field."""
    def _make(**overrides):
        candidate = {
            "id": "R001",
            "model_a": "DE1",
            "model_b": "DE7",
            "relationship_type": "enables",
            "direction": "a→b",
            "confidence": 0.8,
            "logical_derivation": "First Principles provides the decomposition Root Cause Analysis needs.",
            "validated_by": "reviewer",
            "validated_at": datetime(2025, 11, 28, tzinfo=timezone.utc),
        }
        candidate.update(overrides)
        return candidate
    return _make
