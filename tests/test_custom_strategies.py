"""Tests for the saved custom-strategy store and its endpoints."""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from campaign_planner.services.strategy_store import (
    delete_custom_strategy,
    list_recent_strategies,
    save_custom_strategy,
)

MIX_A = {"video": 0.2, "display": 0.3, "social": 0.5}
MIX_B = {"video": 0.6, "display": 0.2, "social": 0.2}


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class TestStrategyStore:
    def test_save_and_list(self, db_session: Session):
        saved = save_custom_strategy(db_session, "Awareness", MIX_A)
        assert saved.id is not None
        assert saved.mix_json == MIX_A

        listed = list_recent_strategies(db_session, limit=10)
        assert [s.name for s in listed] == ["Awareness"]

    def test_save_same_name_updates(self, db_session: Session):
        first = save_custom_strategy(db_session, "Awareness", MIX_A)
        second = save_custom_strategy(db_session, "Awareness", MIX_B)
        assert first.id == second.id
        assert second.mix_json == MIX_B
        assert len(list_recent_strategies(db_session, limit=10)) == 1

    def test_most_recent_first(self, db_session: Session):
        save_custom_strategy(db_session, "Beta", MIX_A)
        save_custom_strategy(db_session, "Alpha", MIX_B)
        listed = list_recent_strategies(db_session, limit=10)
        assert [s.name for s in listed] == ["Alpha", "Beta"]

    def test_limit(self, db_session: Session):
        for i in range(5):
            save_custom_strategy(db_session, f"S{i}", MIX_A)
        assert len(list_recent_strategies(db_session, limit=3)) == 3

    def test_delete(self, db_session: Session):
        strategy_id = save_custom_strategy(db_session, "Gone", MIX_A).id
        assert delete_custom_strategy(db_session, strategy_id) is True
        assert delete_custom_strategy(db_session, strategy_id) is False
        assert list_recent_strategies(db_session, limit=10) == []


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------


def test_save_list_delete_via_api(client: TestClient):
    resp = client.post("/api/custom-strategies", json={"name": "  Video heavy ", "mix": MIX_B})
    assert resp.status_code == 200
    saved = resp.json()
    assert saved["name"] == "Video heavy"
    assert saved["mix"] == MIX_B
    assert "lastUsedAt" in saved

    listed = client.get("/api/custom-strategies").json()
    assert [s["id"] for s in listed] == [saved["id"]]

    resp = client.delete(f"/api/custom-strategies/{saved['id']}")
    assert resp.status_code == 204
    assert client.get("/api/custom-strategies").json() == []

    resp = client.delete(f"/api/custom-strategies/{saved['id']}")
    assert resp.status_code == 404


def test_save_rejects_invalid_mix(client: TestClient):
    resp = client.post(
        "/api/custom-strategies",
        json={"name": "Bad", "mix": {"video": 0.5, "display": 0.3, "social": 0.3}},
    )
    assert resp.status_code == 400
    assert client.get("/api/custom-strategies").json() == []


def test_delete_unknown_id(client: TestClient):
    resp = client.delete(f"/api/custom-strategies/{uuid.uuid4()}")
    assert resp.status_code == 404
