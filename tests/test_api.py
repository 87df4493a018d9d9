"""Tests for the FastAPI API endpoints."""

import pytest
from fastapi.testclient import TestClient

from regress_kernel.api.app import create_app
from regress_kernel.ledger.store import VerificationLedger
from regress_kernel.verification.engine import VerificationEngine

WORLDVIEW_A = {
    "name": "A",
    "good": {"0": True, "1": False},
    "correct": {"positive": True, "negative": False},
}
WORLDVIEW_B = {
    "name": "B",
    "good": {"0": False, "1": True},
    "correct": {"positive": False, "negative": True},
}
OBSERVATION = {"table": {"0": "positive", "1": "negative"}}


@pytest.fixture
def client():
    """Create a test client with fresh components."""
    app = create_app(
        engine=VerificationEngine(),
        ledger=VerificationLedger(db_path=":memory:"),
    )
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestScenarioEndpoints:
    def test_list_scenarios(self, client):
        response = client.get("/scenarios")
        assert response.status_code == 200
        assert response.json() == ["experiment_regress", "model_reliability_regress"]

    def test_run_canonical(self, client):
        response = client.post("/scenarios/experiment_regress/run")
        assert response.status_code == 200
        data = response.json()
        assert data["underdetermined"] is True
        assert data["expectation_met"] is True
        assert data["grounding"]["worldview"]["correct"] == {
            "positive": True, "negative": False,
        }

    def test_run_unknown(self, client):
        response = client.post("/scenarios/nope/run")
        assert response.status_code == 404

    def test_evaluate_custom(self, client):
        response = client.post("/scenarios/evaluate", json={
            "name": "custom",
            "observation": OBSERVATION,
            "worldviews": [WORLDVIEW_A, WORLDVIEW_B],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["scenario"] == "custom"
        assert data["underdetermined"] is True
        assert data["grounding"] is None

    def test_evaluate_single_worldview_rejected(self, client):
        response = client.post("/scenarios/evaluate", json={
            "name": "lonely",
            "observation": OBSERVATION,
            "worldviews": [WORLDVIEW_A],
        })
        assert response.status_code == 422

    def test_evaluate_malformed_rejected(self, client):
        response = client.post("/scenarios/evaluate", json={"name": "broken"})
        assert response.status_code == 422


class TestCheckEndpoints:
    def test_consistency_pass(self, client):
        response = client.post("/consistency", json={
            "worldview": WORLDVIEW_A, "observation": OBSERVATION,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["consistent"] is True
        assert data["verdict"] == "pass"
        assert data["entities_checked"] == 2

    def test_consistency_fail(self, client):
        credulous = dict(WORLDVIEW_A, name="credulous", good={"0": True, "1": True})
        response = client.post("/consistency", json={
            "worldview": credulous, "observation": OBSERVATION,
        })
        data = response.json()
        assert data["consistent"] is False
        assert data["counterexamples"] == [{"id": 1}]

    def test_consistency_missing_outcome(self, client):
        partial = dict(WORLDVIEW_A, correct={"positive": True})
        response = client.post("/consistency", json={
            "worldview": partial, "observation": OBSERVATION,
        })
        assert response.status_code == 422

    def test_consistency_uncovered_entity(self, client):
        partial = dict(WORLDVIEW_A, good={"0": True})
        response = client.post("/consistency", json={
            "worldview": partial, "observation": OBSERVATION,
        })
        assert response.status_code == 422

    def test_disagreement(self, client):
        response = client.post("/disagreement", json={
            "first": WORLDVIEW_A, "second": WORLDVIEW_B,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["disagree"] is True
        assert data["witnesses"] == ["positive", "negative"]

    def test_grounding(self, client):
        response = client.post("/grounding", json={
            "criterion": {
                "name": "audit",
                "basis": "Independent audit",
                "table": {"0": True, "1": False},
            },
            "observation": OBSERVATION,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["worldview"]["correct"] == {"positive": True, "negative": False}
        assert data["witnesses"] == {"positive": [{"id": 0}]}
        assert data["uniquely_determined"] is True

    def test_grounding_uncovered_entity(self, client):
        response = client.post("/grounding", json={
            "criterion": {"name": "audit", "basis": "b", "table": {"0": True}},
            "observation": OBSERVATION,
        })
        assert response.status_code == 422


class TestLedgerEndpoints:
    def test_runs_recorded(self, client):
        client.post("/scenarios/experiment_regress/run")
        client.post("/scenarios/model_reliability_regress/run")

        response = client.get("/ledger")
        assert response.status_code == 200
        records = response.json()
        assert [r["scenario"] for r in records] == [
            "experiment_regress", "model_reliability_regress",
        ]

        filtered = client.get("/ledger", params={"scenario": "experiment_regress"})
        assert len(filtered.json()) == 1

        record_id = records[0]["id"]
        single = client.get(f"/ledger/{record_id}")
        assert single.status_code == 200
        assert single.json()["signature"] == records[0]["signature"]

    def test_verify(self, client):
        client.post("/scenarios/experiment_regress/run")
        response = client.get("/ledger/verify")
        assert response.json() == {"intact": True, "records": 1}

    def test_missing_record(self, client):
        response = client.get("/ledger/ver_missing")
        assert response.status_code == 404
