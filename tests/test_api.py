"""
Tests for the HTTP API.
"""
import pytest
from fastapi.testclient import TestClient

from model_graph.api import app, get_store
from model_graph.ingest import CSV_TEMPLATE
from model_graph.storage import RelationshipStore, RelationshipStoreClient


def as_json(candidate):
    body = dict(candidate)
    body["validated_at"] = body["validated_at"].isoformat()
    return body


@pytest.fixture
def api(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestRelationshipEndpoints:

    def test_health(self, api):
        response = api.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_create_and_fetch(self, api, make_candidate):
        response = api.post("/relationships", json=as_json(make_candidate()))
        assert response.status_code == 201
        assert response.json()["id"] == "R001"
        assert response.json()["review_status"] == "pending"

        fetched = api.get("/relationships/R001")
        assert fetched.status_code == 200
        assert fetched.json()["model_b"] == "DE7"

    def test_duplicate_is_conflict(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate()))
        response = api.post("/relationships", json=as_json(make_candidate(model_b="P1")))
        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "duplicate"

    def test_same_endpoints_rejected(self, api, make_candidate):
        response = api.post("/relationships", json=as_json(make_candidate(model_b="DE1")))
        assert response.status_code == 422

    def test_unknown_type_rejected(self, api, make_candidate):
        response = api.post("/relationships", json=as_json(make_candidate(relationship_type="x")))
        assert response.status_code == 422
        assert response.json()["detail"]["kind"] == "validation"

    def test_missing_relationship(self, api):
        assert api.get("/relationships/none").status_code == 404

    def test_list_with_filters(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate(id="R1")))
        api.post("/relationships", json=as_json(make_candidate(
            id="R2", model_a="P1", model_b="P5", review_status="approved",
        )))

        everything = api.get("/relationships").json()
        assert everything["total"] == 2
        assert everything["limit"] == 50

        approved = api.get("/relationships", params={"status": "approved"}).json()
        assert [r["id"] for r in approved["relationships"]] == ["R2"]

        by_model = api.get("/relationships", params={"model": "de1"}).json()
        assert [r["id"] for r in by_model["relationships"]] == ["R1"]

    def test_model_view(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate(id="R1")))
        api.post("/relationships", json=as_json(make_candidate(
            id="R2", model_a="P1", model_b="DE1", direction="bidirectional",
        )))

        body = api.get("/models/de1/relationships").json()
        assert body["model"] == "DE1"
        entries = {e["relationship_id"]: e for e in body["relationships"]}
        assert entries["R1"]["direction"] == "outgoing"
        assert entries["R1"]["related_model"] == "DE7"
        assert entries["R2"]["direction"] == "bidirectional"
        assert entries["R2"]["related_model"] == "P1"

    def test_lowercase_codes_round_trip(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate(id="R1", model_a="p1", model_b="p5")))

        stored = api.get("/relationships/R1").json()
        assert (stored["model_a"], stored["model_b"]) == ("P1", "P5")

        body = api.get("/models/p1/relationships").json()
        assert [e["relationship_id"] for e in body["relationships"]] == ["R1"]
        assert api.get("/relationships", params={"model": "p1"}).json()["total"] == 1

    def test_same_model_in_different_case_rejected(self, api, make_candidate):
        response = api.post("/relationships", json=as_json(make_candidate(model_a="de1", model_b="DE1")))
        assert response.status_code == 422
        assert api.get("/relationships").json()["total"] == 0

    def test_incoming_direction(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate(id="R1")))
        body = api.get("/models/DE7/relationships").json()
        assert body["relationships"][0]["direction"] == "incoming"


class TestGraphEndpoint:

    def test_graph_export(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate(id="R1")))
        body = api.get("/graph").json()
        assert body["metadata"]["total_edges"] == 1
        assert {n["id"] for n in body["nodes"]} == {"DE1", "DE7"}

    def test_cytoscape_format(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate(id="R1")))
        body = api.get("/graph", params={"format": "cytoscape"}).json()
        assert len(body["elements"]) == 3


    def test_neighbors(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate(id="R1", model_a="A", model_b="B")))
        api.post("/relationships", json=as_json(make_candidate(
            id="R2", model_a="B", model_b="C", direction="bidirectional",
        )))

        body = api.get("/models/a/neighbors", params={"hops": 2}).json()
        assert body["model"] == "A"
        assert body["neighbors"] == {"B": 1, "C": 2}
        assert api.get("/models/A/neighbors").json()["neighbors"] == {"B": 1}
        assert api.get("/models/C/neighbors").json()["neighbors"] == {"B": 1}

    def test_neighbors_hops_bounded(self, api):
        assert api.get("/models/A/neighbors", params={"hops": 0}).status_code == 422

    def test_stats(self, api, make_candidate):
        api.post("/relationships", json=as_json(make_candidate(
            id="R1", model_a="A", model_b="B", direction="bidirectional",
        )))
        assert api.get("/graph/stats").json() == {"models": 2, "relationships": 1, "edges": 2}


class TestSeedEndpoints:

    def test_seed_counts(self, api, make_candidate):
        candidates = [
            as_json(make_candidate(id="r1", model_a="A", model_b="B")),
            as_json(make_candidate(id="r1", model_a="A", model_b="C")),
        ]
        response = api.post("/seed", json=candidates)
        assert response.status_code == 200
        body = response.json()
        assert body["success_count"] == 1
        assert body["error_count"] == 1
        assert body["status"] == "partial"
        assert body["failures"][0]["kind"] == "duplicate"

    def test_seed_empty(self, api):
        body = api.post("/seed", json=[]).json()
        assert body["status"] == "empty"
        assert body["success_count"] == 0
        assert body["error_count"] == 0

    def test_import_csv(self, api):
        response = api.post(
            "/import/csv",
            content=CSV_TEMPLATE.encode("utf-8"),
            headers={"Content-Type": "text/csv"},
        )
        assert response.status_code == 200
        assert response.json()["created_ids"] == ["R011"]

    def test_import_csv_dry_run(self, api):
        response = api.post(
            "/import/csv",
            params={"dry_run": True},
            content=CSV_TEMPLATE.encode("utf-8"),
        )
        assert response.json()["success_count"] == 1
        assert api.get("/relationships/R011").status_code == 404


class TestUninitialized:

    def test_store_missing(self):
        client = TestClient(app)
        response = client.get("/relationships")
        assert response.status_code == 500


class TestStoreFailures:

    def test_unavailable_store_is_503(self, engine, config, make_candidate):
        # Tables were never created on this engine
        broken = RelationshipStore(RelationshipStoreClient(engine), config)
        app.dependency_overrides[get_store] = lambda: broken
        try:
            client = TestClient(app)
            response = client.post("/relationships", json=as_json(make_candidate()))
            assert response.status_code == 503
            assert response.json()["detail"]["kind"] == "unavailable"
            assert client.get("/graph").status_code == 503
        finally:
            app.dependency_overrides.clear()
