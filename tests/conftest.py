"""Shared test fixtures.

Every test gets its own in-memory SQLite database (StaticPool, so all sessions
share one connection) and its own status table, hub and store; nothing is
shared between tests through module globals.
"""
from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from opportunity_radar.config import Settings
from opportunity_radar.db import create_db_engine
from opportunity_radar.main import create_app
from opportunity_radar.providers import SOURCE_NAMES
from opportunity_radar.schemas import OpportunityCandidate
from opportunity_radar.services.broadcast import BroadcastHub
from opportunity_radar.services.source_status import DataSourceStatusTable
from opportunity_radar.services.store import OpportunityStore


# ---------------------------------------------------------------------------
# Settings and storage
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> Settings:
    """Test settings: in-memory DB, no background loops, no artificial delays."""
    return Settings(
        _env_file=None,
        environment="test",
        database_url="sqlite://",
        enable_background_tasks=False,
        inter_adapter_delay_seconds=0,
        sentiment_mention_spacing_seconds=0,
        sentiment_trend_spacing_seconds=0,
        coingecko_api_key="",
        coinmarketcap_api_key="",
        twitter_bearer_token="",
    )


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> OpportunityStore:
    return OpportunityStore(engine)


@pytest.fixture
def make_candidate() -> Callable[..., OpportunityCandidate]:
    """Factory fixture: a valid candidate with overridable fields."""

    def _make(name: str = "Test Game", **overrides) -> OpportunityCandidate:
        fields = {
            "name": name,
            "description": f"{name} description",
            "category": "P2E Games",
            "source_url": "https://playtoearn.com/blockchaingames/",
            "hotness_score": 150.0,
        }
        fields.update(overrides)
        return OpportunityCandidate(**fields)

    return _make


# ---------------------------------------------------------------------------
# Live channel
# ---------------------------------------------------------------------------

@pytest.fixture
def hub() -> BroadcastHub:
    return BroadcastHub(send_timeout=0.5)


@pytest.fixture
def status_table(hub) -> DataSourceStatusTable:
    return DataSourceStatusTable(SOURCE_NAMES, listener=hub.publish_status_change)


# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------

@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """TestClient with the lifespan running (tables created, no background loops)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def app_store(app, client) -> OpportunityStore:
    """The store behind `client`."""
    return app.state.container.store()
