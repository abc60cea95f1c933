"""Tests for the HTTP API and live channel through FastAPI's TestClient."""
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from opportunity_radar.deps import get_store
from opportunity_radar.main import create_app
from opportunity_radar.providers import SOURCE_NAMES
from opportunity_radar.utils import utcnow
from tests.helpers import add_score_event, backdate

NEW_GAME = {
    "name": "Pixel Quest",
    "description": "Farming game with on-chain land",
    "category": "P2E Games",
    "sourceUrl": "https://playtoearn.com/blockchaingames/",
    "websiteUrl": "https://pixelquest.example",
    "estimatedValue": 750,
    "twitterFollowers": 12000,
    "hotnessScore": 180,
}


@pytest.fixture
def app_engine(app, client):
    return app.state.container.engine()


# ---------------------------------------------------------------------------
# Health and CRUD
# ---------------------------------------------------------------------------

def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_then_get_round_trip(client):
    created = client.post("/api/opportunities", json=NEW_GAME)
    assert created.status_code == 201
    body = created.json()
    assert body["id"] > 0
    assert body["name"] == "Pixel Quest"
    assert body["websiteUrl"] == "https://pixelquest.example"
    assert body["hotnessScore"] == 180
    assert body["isActive"] is True
    assert "createdAt" in body and "updatedAt" in body

    fetched = client.get(f"/api/opportunities/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == body


def test_manual_create_never_merges(client):
    first = client.post("/api/opportunities", json=NEW_GAME).json()
    second = client.post("/api/opportunities", json=NEW_GAME).json()
    assert first["id"] != second["id"]
    assert len(client.get("/api/opportunities").json()) == 2


def test_create_clamps_hotness_and_normalizes_category(client):
    body = client.post(
        "/api/opportunities",
        json={**NEW_GAME, "hotnessScore": 1000, "category": "airdrops"},
    ).json()
    assert body["hotnessScore"] == 300
    assert body["category"] == "Airdrops"


def test_update_and_delete(client):
    created = client.post("/api/opportunities", json=NEW_GAME).json()

    patched = client.patch(f"/api/opportunities/{created['id']}", json={"description": "Updated"})
    assert patched.status_code == 200
    assert patched.json()["description"] == "Updated"
    assert patched.json()["name"] == "Pixel Quest"

    deleted = client.delete(f"/api/opportunities/{created['id']}")
    assert deleted.status_code == 204
    assert deleted.content == b""
    assert client.get(f"/api/opportunities/{created['id']}").status_code == 404


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("get", "/api/opportunities/999", {}),
        ("patch", "/api/opportunities/999", {"json": {"description": "x"}}),
        ("delete", "/api/opportunities/999", {}),
        ("get", "/api/opportunities/999/history", {}),
    ],
)
def test_unknown_opportunity_is_404(client, method, path, kwargs):
    response = getattr(client, method)(path, **kwargs)
    assert response.status_code == 404
    assert response.json() == {"detail": "Opportunity not found"}


@pytest.mark.parametrize(
    "payload",
    [
        {**NEW_GAME, "name": ""},
        {**NEW_GAME, "description": "   "},
        {key: value for key, value in NEW_GAME.items() if key != "sourceUrl"},
        {**NEW_GAME, "category": ""},
    ],
)
def test_invalid_create_is_400(client, payload):
    response = client.post("/api/opportunities", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid request data"
    assert body["errors"]


@pytest.mark.parametrize(
    "changes",
    [
        {"name": None},
        {"name": "   "},
        {"description": ""},
        {"sourceUrl": None},
        {"category": None},
        {"category": "  "},
        {"hotnessScore": None},
        {"isActive": None},
        {"twitterFollowers": None},
        {"marketCap": None},
    ],
)
def test_invalid_update_is_400_and_leaves_record_untouched(client, changes):
    created = client.post("/api/opportunities", json=NEW_GAME).json()

    response = client.patch(f"/api/opportunities/{created['id']}", json=changes)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"
    assert client.get(f"/api/opportunities/{created['id']}").json() == created


def test_update_can_clear_optional_fields(client):
    created = client.post("/api/opportunities", json=NEW_GAME).json()
    assert created["websiteUrl"] == "https://pixelquest.example"

    patched = client.patch(f"/api/opportunities/{created['id']}", json={"websiteUrl": None})
    assert patched.status_code == 200
    assert patched.json()["websiteUrl"] is None


# ---------------------------------------------------------------------------
# Listing filters
# ---------------------------------------------------------------------------

@pytest.fixture
def seeded(app_store, make_candidate):
    return {
        "game": app_store.create(make_candidate("Axie Arena", hotness_score=200)),
        "drop": app_store.create(make_candidate("Zk Drop", category="Airdrops", hotness_score=150)),
        "eth": app_store.create(make_candidate("Ethereum Staking", category="DeFi", hotness_score=250)),
    }


def test_list_returns_active_records_hottest_first(client, seeded):
    names = [o["name"] for o in client.get("/api/opportunities").json()]
    assert names == ["Ethereum Staking", "Axie Arena", "Zk Drop"]


def test_search_takes_precedence_over_category(client, seeded):
    response = client.get("/api/opportunities", params={"search": "zk", "category": "P2E Games"})
    assert [o["name"] for o in response.json()] == ["Zk Drop"]


def test_category_filter_and_all(client, seeded):
    airdrops = client.get("/api/opportunities", params={"category": "airdrops"}).json()
    assert [o["name"] for o in airdrops] == ["Zk Drop"]
    everything = client.get("/api/opportunities", params={"category": "all"}).json()
    assert len(everything) == 3


def test_category_takes_precedence_over_time_frame(client, seeded, app_engine):
    backdate(app_engine, seeded["drop"].id, utcnow() - timedelta(days=2))
    response = client.get("/api/opportunities", params={"category": "Airdrops", "timeFrame": "1h"})
    assert [o["name"] for o in response.json()] == ["Zk Drop"]


def test_time_frame_filter(client, seeded, app_engine):
    backdate(app_engine, seeded["drop"].id, utcnow() - timedelta(days=2))
    recent = client.get("/api/opportunities", params={"timeFrame": "24h"}).json()
    assert {o["name"] for o in recent} == {"Axie Arena", "Ethereum Staking"}
    week = client.get("/api/opportunities", params={"category": "all", "timeFrame": "7d"}).json()
    assert len(week) == 3


def test_invalid_time_frame_is_400(client):
    assert client.get("/api/opportunities", params={"timeFrame": "2h"}).status_code == 400


def test_limit_and_exclude_mainstream(client, seeded):
    limited = client.get("/api/opportunities", params={"limit": 1}).json()
    assert [o["name"] for o in limited] == ["Ethereum Staking"]

    filtered = client.get("/api/opportunities", params={"excludeMainstream": "true"}).json()
    assert [o["name"] for o in filtered] == ["Axie Arena", "Zk Drop"]


def test_hot_list_default_and_bounds(client, app_store, make_candidate):
    for index in range(6):
        app_store.create(make_candidate(f"Game {index}", hotness_score=index * 10))
    hot = client.get("/api/opportunities/hot").json()
    assert [o["name"] for o in hot] == ["Game 5", "Game 4", "Game 3", "Game 2"]
    assert len(client.get("/api/opportunities/hot", params={"limit": 10}).json()) == 6
    assert client.get("/api/opportunities/hot", params={"limit": 0}).status_code == 400


# ---------------------------------------------------------------------------
# History, stats and analytics
# ---------------------------------------------------------------------------

def test_history_returns_daily_points(client, app_store, app_engine, make_candidate):
    record = app_store.create(make_candidate("Tracked", hotness_score=120, estimated_value=10))
    add_score_event(app_engine, record.id, record.created_at - timedelta(days=2), 90, 5)

    points = client.get(f"/api/opportunities/{record.id}/history", params={"days": 7}).json()
    assert len(points) == 3
    assert points[0] == {
        "date": (record.created_at - timedelta(days=2)).date().isoformat(),
        "hotnessScore": 90,
        "estimatedValue": 5,
    }
    assert points[-1]["hotnessScore"] == 120


def test_history_days_out_of_range_is_400(client, seeded):
    response = client.get(f"/api/opportunities/{seeded['game'].id}/history", params={"days": 0})
    assert response.status_code == 400


def test_stats(client, seeded):
    stats = client.get("/api/stats").json()
    assert stats == {
        "totalOpportunities": 3,
        "activeAirdrops": 1,
        "newListings": 0,
        "p2eGames": 1,
        "totalValue": 0.0,
    }


def test_analytics_routes(client, seeded):
    velocity = client.get("/api/analytics/velocity", params={"hours": 6}).json()
    assert {v["category"] for v in velocity} == {"P2E Games", "Airdrops", "DeFi"}
    assert velocity[0]["velocityPerHour"] == round(1 / 6, 2)

    progression = client.get("/api/analytics/hotness-progression").json()
    assert progression["totalOpportunities"] == 3
    assert progression["scoreDistribution"]["250-300"] == 1

    sources = client.get("/api/analytics/source-correlation").json()
    assert sources[0]["source"] == "playtoearn.com"
    assert sources[0]["totalOpportunities"] == 3
    assert sources[0]["performance"] == "excellent"


def test_velocity_rejects_zero_hours(client):
    response = client.get("/api/analytics/velocity", params={"hours": 0})
    assert response.status_code == 400


# ---------------------------------------------------------------------------
# Sources and sentiment
# ---------------------------------------------------------------------------

def test_data_source_status_lists_every_source(client):
    statuses = client.get("/api/data-sources/status").json()
    assert set(statuses) == set(SOURCE_NAMES)
    assert statuses["coingecko"] == {"active": False, "lastUpdate": None, "error": None}


def test_sentiment_is_empty_before_first_cycle(client):
    assert client.get("/api/social/sentiment").json() == []


# ---------------------------------------------------------------------------
# Live channel
# ---------------------------------------------------------------------------

def test_websocket_greets_with_status_then_opportunities(client, seeded):
    with client.websocket_connect("/ws") as websocket:
        status_frame = websocket.receive_json()
        opportunities_frame = websocket.receive_json()

    assert status_frame["type"] == "data_sources_status"
    assert set(status_frame["data"]) == set(SOURCE_NAMES)
    assert opportunities_frame["type"] == "opportunities_update"
    assert [o["name"] for o in opportunities_frame["data"]] == [
        "Ethereum Staking", "Axie Arena", "Zk Drop",
    ]


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------

class BrokenStore:
    def list_all(self):
        raise RuntimeError("database exploded")


def test_unhandled_error_is_500_with_detail_outside_production(app):
    app.dependency_overrides[get_store] = BrokenStore
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/opportunities")
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error", "detail": "database exploded"}


def test_unhandled_error_hides_detail_in_production(settings):
    app = create_app(settings.model_copy(update={"environment": "production"}))
    app.dependency_overrides[get_store] = BrokenStore
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/opportunities")
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
