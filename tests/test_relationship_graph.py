"""
Tests for the relationship graph.
"""
from datetime import datetime, timezone

import pytest

from model_graph.graph import RelationshipGraph
from model_graph.schema import PersistedRelationship


def record(rel_id, model_a, model_b, direction="a→b", confidence=0.8, status="pending"):
    return PersistedRelationship(
        id=rel_id,
        model_a=model_a,
        model_b=model_b,
        relationship_type="enables",
        direction=direction,
        confidence=confidence,
        logical_derivation="because",
        validated_by="reviewer",
        validated_at=datetime(2025, 11, 28, tzinfo=timezone.utc),
        review_status=status,
    )


@pytest.fixture
def graph():
    return RelationshipGraph.from_relationships([
        record("R1", "A", "B"),
        record("R2", "C", "B", direction="b→a"),
        record("R3", "C", "D", direction="bidirectional", confidence=0.4, status="approved"),
    ])


class TestStructure:
    """Direction decides which edges exist."""

    def test_edges_follow_direction(self, graph):
        assert graph.graph.has_edge("A", "B")
        assert not graph.graph.has_edge("B", "A")
        assert graph.graph.has_edge("B", "C")
        assert not graph.graph.has_edge("C", "B")
        assert graph.graph.has_edge("C", "D")
        assert graph.graph.has_edge("D", "C")

    def test_edges_carry_relationship_attributes(self, graph):
        data = graph.graph["C"]["D"]["R3"]
        assert data["confidence"] == 0.4
        assert data["review_status"] == "approved"
        assert (data["model_a"], data["model_b"]) == ("C", "D")
        assert graph.graph["D"]["C"]["R3"] == data

    def test_stats(self, graph):
        assert graph.get_stats() == {"models": 4, "relationships": 3, "edges": 4}

    def test_parallel_relationships_kept(self):
        g = RelationshipGraph.from_relationships([record("R1", "A", "B"), record("R2", "A", "B")])
        assert g.get_stats()["edges"] == 2


class TestNeighbors:
    """Traversal along edge direction."""

    def test_one_hop(self, graph):
        assert graph.neighbors("A") == {"B": 1}

    def test_multiple_hops(self, graph):
        assert graph.neighbors("A", hops=3) == {"B": 1, "C": 2, "D": 3}

    def test_unknown_model(self, graph):
        assert graph.neighbors("Z") == {}


class TestExport:
    """Export to nodes, edges and Cytoscape elements."""

    def test_full_export(self, graph):
        exported = graph.export()
        assert exported.metadata.total_edges == 3
        assert exported.metadata.total_nodes == 4
        assert [e.relationship_id for e in exported.edges] == ["R1", "R2", "R3"]
        degrees = {n.id: n.degree for n in exported.nodes}
        assert degrees == {"A": 1, "B": 2, "C": 2, "D": 1}

    def test_confidence_filter(self, graph):
        exported = graph.export(confidence_min=0.5)
        assert {e.relationship_id for e in exported.edges} == {"R1", "R2"}
        assert "D" not in {n.id for n in exported.nodes}
        assert exported.metadata.confidence_filter == 0.5

    def test_status_filter(self, graph):
        exported = graph.export(review_status="approved")
        assert [e.relationship_id for e in exported.edges] == ["R3"]

    def test_cytoscape(self, graph):
        elements = graph.to_cytoscape().elements
        edges = [e for e in elements if "source" in e["data"]]
        nodes = [e for e in elements if "source" not in e["data"]]
        assert len(nodes) == 4
        assert len(edges) == 3
        assert edges[0]["data"]["direction"] == "a→b"
