"""Tests for the REST API — evaluate, strategies and config endpoints."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from colony_priority.api.app import create_app
from colony_priority.config import PriorityConfig


@pytest.fixture(scope="module")
def client():
    app = create_app(PriorityConfig(log_level="WARNING"))
    with TestClient(app) as c:
        yield c


def _snapshot(**extra):
    snap = {
        "tick": 12000,
        "metrics": {"num_pawns": 2},
        "colonists": [
            {"id": 1, "name": "Engie", "skills": {"Cooking": {"level": 14, "passion": 2}}},
            {"id": 2, "name": "Doc", "skills": {"Medicine": {"level": 12}}, "work_tiers": {"Cooking": 2}},
        ],
    }
    snap.update(extra)
    return snap


def _actor():
    return _snapshot()["colonists"][0]


# ---------------------------------------------------------------------------
# /priority
# ---------------------------------------------------------------------------

class TestEvaluateEndpoint:

    def test_evaluate_single_category(self, client):
        resp = client.post("/api/v1/priority/evaluate", json={
            "actor": _actor(), "category": "Cooking", "snapshot": _snapshot(),
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["category"] == "Cooking"
        assert 0.0 <= body["value"] <= 1.0
        assert body["tier"] in range(0, 5)
        assert body["justifications"][0] == "Global default: 20%"

    def test_disabled_category(self, client):
        resp = client.post("/api/v1/priority/evaluate", json={
            "actor": _actor(), "category": "Cooking",
            "snapshot": _snapshot(disabled_categories=["Cooking"]),
        })
        body = resp.json()
        assert body["disabled"] is True
        assert body["tier"] == 0

    def test_unknown_category_uses_default(self, client):
        resp = client.post("/api/v1/priority/evaluate", json={
            "actor": _actor(), "category": "Stonecutting", "snapshot": _snapshot(),
        })
        assert resp.status_code == 200

    def test_invalid_settings_rejected(self, client):
        resp = client.post("/api/v1/priority/evaluate", json={
            "actor": _actor(), "category": "Cooking",
            "snapshot": _snapshot(settings={"beauty": 50.0}),
        })
        assert resp.status_code == 422

    def test_evaluate_all(self, client):
        resp = client.post("/api/v1/priority/evaluate-all", json={
            "actor": _actor(), "snapshot": _snapshot(),
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["actor_id"] == 1
        assert len(body["results"]) == 21
        assert set(body["tiers"]) == {r["category"] for r in body["results"]}

    def test_evaluate_all_tiers_only_uses_cache(self, client):
        payload = {"actor": _actor(), "snapshot": _snapshot(tick=777), "justifications": False}
        first = client.post("/api/v1/priority/evaluate-all", json=payload).json()
        hits_before = client.get("/api/v1/config").json()["cache_hits"]
        second = client.post("/api/v1/priority/evaluate-all", json=payload).json()
        hits_after = client.get("/api/v1/config").json()["cache_hits"]
        assert first["results"] == []
        assert first["tiers"] == second["tiers"]
        assert hits_after - hits_before == 21


# ---------------------------------------------------------------------------
# /strategies and /config
# ---------------------------------------------------------------------------

class TestMetadataEndpoints:

    def test_strategies_listing(self, client):
        body = client.get("/api/v1/strategies").json()
        assert body["count"] == 22
        last = body["strategies"][-1]
        assert last["is_default"] is True
        assert last["category"] is None
        cooking = next(s for s in body["strategies"] if s["category"] == "Cooking")
        assert cooking["steps"][0] == "consider_relevant_skills"

    def test_config(self, client):
        body = client.get("/api/v1/config").json()
        assert body["strict"] is False
        assert "Cooking" in body["categories"]
        assert "HaulingUrgent" not in body["categories"]
