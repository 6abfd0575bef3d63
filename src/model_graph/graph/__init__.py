"""
Graph view of persisted relationships.
"""
from .relationship_graph import RelationshipGraph

__all__ = ["RelationshipGraph"]
