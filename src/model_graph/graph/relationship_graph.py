"""
Relationship graph over persisted relationships.

Architecture:
- Storage: NetworkX multi-digraph keyed by relationship id, so two
  relationships between the same pair of models stay distinct
- Direction: ``a→b`` adds A→B, ``b→a`` adds B→A, ``bidirectional`` adds both
- Export: nodes/edges/metadata for visualization, plus a Cytoscape element list
"""
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import networkx as nx

from ..schema.graph import CytoscapeGraph, GraphEdge, GraphExport, GraphMetadata, GraphNode
from ..schema.relationship import Direction, PersistedRelationship


class RelationshipGraph:
    """Directed graph of mental models connected by relationships."""

    def __init__(self):
        self.graph = nx.MultiDiGraph()

    @classmethod
    def from_relationships(cls, records: Iterable[PersistedRelationship]) -> "RelationshipGraph":
        graph = cls()
        for record in records:
            graph.add_relationship(record)
        return graph

    def add_relationship(self, record: PersistedRelationship) -> None:
        """
        Add a relationship as one or two directed edges.

        Every edge carries the relationship's attributes and is keyed by
        its id.

        Args:
            record: Persisted relationship
        """
        self.graph.add_node(record.model_a)
        self.graph.add_node(record.model_b)

        if record.direction == Direction.B_TO_A:
            pairs = [(record.model_b, record.model_a)]
        elif record.direction == Direction.BIDIRECTIONAL:
            pairs = [(record.model_a, record.model_b), (record.model_b, record.model_a)]
        else:
            pairs = [(record.model_a, record.model_b)]

        for source, target in pairs:
            self.graph.add_edge(
                source,
                target,
                key=record.id,
                model_a=record.model_a,
                model_b=record.model_b,
                type=record.relationship_type,
                direction=record.direction,
                confidence=record.confidence,
                review_status=record.review_status.value,
                logical_derivation=record.logical_derivation,
            )

    def _relationship_edges(self) -> Dict[str, dict]:
        """One attribute dict per relationship id, however many edges it has."""
        relationships = {}
        for _, _, key, data in self.graph.edges(keys=True, data=True):
            relationships.setdefault(key, data)
        return relationships

    def neighbors(self, code: str, hops: int = 1) -> Dict[str, int]:
        """
        Get models reachable from ``code`` within N hops along edge direction.

        Args:
            code: Model code
            hops: Number of hops to traverse

        Returns:
            Dictionary mapping reachable model codes to path length
        """
        if code not in self.graph:
            return {}

        neighbors_dict = {}
        queue = [(code, 0)]
        visited = {code}

        while queue:
            current, depth = queue.pop(0)

            if depth > 0:
                neighbors_dict[current] = depth

            if depth < hops:
                for neighbor in self.graph.successors(current):
                    if neighbor not in visited:
                        visited.add(neighbor)
                        queue.append((neighbor, depth + 1))

        return neighbors_dict

    def export(
        self,
        confidence_min: Optional[float] = None,
        review_status: Optional[str] = None,
    ) -> GraphExport:
        """
        Export nodes and edges, optionally filtered.

        Each relationship appears once as an edge from model_a to model_b;
        its direction travels with it. Nodes are limited to models touched
        by an exported edge.

        Args:
            confidence_min: Drop relationships below this confidence
            review_status: Keep only relationships in this review state
        """
        selected = []
        for rel_id, data in self._relationship_edges().items():
            if confidence_min is not None and data["confidence"] < confidence_min:
                continue
            if review_status is not None and data["review_status"] != review_status:
                continue
            selected.append((rel_id, data))

        degree: Dict[str, int] = {}
        edges: List[GraphEdge] = []
        for rel_id, data in sorted(selected, key=lambda item: item[0]):
            degree[data["model_a"]] = degree.get(data["model_a"], 0) + 1
            degree[data["model_b"]] = degree.get(data["model_b"], 0) + 1
            edges.append(GraphEdge(
                source=data["model_a"],
                target=data["model_b"],
                relationship_id=rel_id,
                type=data["type"],
                direction=data["direction"],
                confidence=data["confidence"],
                logical_derivation=data["logical_derivation"],
            ))

        nodes = [GraphNode(id=code, degree=count) for code, count in sorted(degree.items())]

        return GraphExport(
            nodes=nodes,
            edges=edges,
            metadata=GraphMetadata(
                total_nodes=len(nodes),
                total_edges=len(edges),
                confidence_filter=confidence_min,
                status_filter=review_status,
                generated_at=datetime.now(timezone.utc),
            ),
        )

    def to_cytoscape(
        self,
        confidence_min: Optional[float] = None,
        review_status: Optional[str] = None,
    ) -> CytoscapeGraph:
        """Export in Cytoscape's ``elements`` format."""
        exported = self.export(confidence_min=confidence_min, review_status=review_status)
        elements = [{"data": {"id": node.id, "label": node.id}} for node in exported.nodes]
        for edge in exported.edges:
            elements.append({
                "data": {
                    "id": edge.relationship_id,
                    "source": edge.source,
                    "target": edge.target,
                    "label": edge.type,
                    "type": edge.type,
                    "direction": edge.direction.value,
                    "confidence": edge.confidence,
                }
            })
        return CytoscapeGraph(elements=elements)

    def get_stats(self) -> Dict[str, int]:
        """
        Get graph statistics.

        Returns:
            Dictionary with model, relationship and directed edge counts
        """
        return {
            "models": self.graph.number_of_nodes(),
            "relationships": len(self._relationship_edges()),
            "edges": self.graph.number_of_edges(),
        }
