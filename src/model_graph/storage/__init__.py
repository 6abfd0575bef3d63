"""
Relationship persistence: row store client and validating façade.
"""
from .errors import StoreError, StoreErrorKind
from .relationship_store import RelationshipStore, normalize_candidate
from .store_client import RelationshipStoreClient, create_store_engine, relationships_table

__all__ = [
    "RelationshipStore",
    "RelationshipStoreClient",
    "StoreError",
    "StoreErrorKind",
    "create_store_engine",
    "normalize_candidate",
    "relationships_table",
]
