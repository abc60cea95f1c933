"""Tests for per-user price alerts (service and routes)."""
import pytest

from opportunity_radar.schemas import AlertCondition, PriceAlertCreate
from opportunity_radar.services.alerts import PriceAlertBook


@pytest.fixture
def book() -> PriceAlertBook:
    return PriceAlertBook()


def _request(symbol="eth", price=3000.0, condition="above") -> PriceAlertCreate:
    return PriceAlertCreate(symbol=symbol, target_price=price, condition=condition)


# ---------------------------------------------------------------------------
# PriceAlertBook
# ---------------------------------------------------------------------------

def test_add_assigns_id_and_normalizes_symbol(book):
    alert = book.add("alice", _request())
    assert alert.id == 1
    assert alert.user_id == "alice"
    assert alert.symbol == "ETH"
    assert alert.condition is AlertCondition.ABOVE
    assert alert.is_active is True
    assert book.list_active("alice") == [alert]


def test_alerts_are_isolated_per_user(book):
    book.add("alice", _request())
    book.add("bob", _request(symbol="sol", price=150, condition="below"))
    assert [a.symbol for a in book.list_active("alice")] == ["ETH"]
    assert [a.symbol for a in book.list_active("bob")] == ["SOL"]
    assert book.list_active("carol") == []


def test_deactivate_hides_alert(book):
    first = book.add("alice", _request())
    second = book.add("alice", _request(symbol="btc"))

    deactivated = book.deactivate("alice", first.id)

    assert deactivated.is_active is False
    assert book.list_active("alice") == [second]


def test_deactivate_unknown_or_foreign_alert(book):
    alert = book.add("alice", _request())
    assert book.deactivate("bob", alert.id) is None
    assert book.deactivate("alice", 999) is None


@pytest.mark.parametrize("symbol, price", [("   ", 10), ("ETH", 0), ("ETH", -1)])
def test_invalid_requests_are_rejected(symbol, price):
    with pytest.raises(ValueError):
        PriceAlertCreate(symbol=symbol, target_price=price, condition="above")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

def test_create_and_list_alert_over_http(client):
    response = client.post(
        "/api/alerts",
        params={"userId": "alice"},
        json={"symbol": "eth", "targetPrice": 3000, "condition": "above"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["symbol"] == "ETH"
    assert body["targetPrice"] == 3000
    assert body["condition"] == "above"
    assert body["userId"] == "alice"
    assert body["isActive"] is True

    listed = client.get("/api/alerts", params={"userId": "alice"}).json()
    assert [a["id"] for a in listed] == [body["id"]]
    assert client.get("/api/alerts").json() == []


def test_anonymous_user_is_the_default(client):
    client.post("/api/alerts", json={"symbol": "sol", "targetPrice": 100, "condition": "below"})
    assert [a["symbol"] for a in client.get("/api/alerts", params={"userId": "anonymous"}).json()] == ["SOL"]


def test_deactivate_alert_over_http(client):
    created = client.post(
        "/api/alerts", params={"userId": "bob"},
        json={"symbol": "eth", "targetPrice": 2500, "condition": "below"},
    ).json()

    response = client.post(f"/api/alerts/{created['id']}/deactivate", params={"userId": "bob"})
    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert client.get("/api/alerts", params={"userId": "bob"}).json() == []

    missing = client.post(f"/api/alerts/{created['id']}/deactivate", params={"userId": "eve"})
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Alert not found"}


@pytest.mark.parametrize(
    "body",
    [
        {"symbol": "ETH", "targetPrice": 0, "condition": "above"},
        {"symbol": "ETH", "targetPrice": 10, "condition": "sideways"},
        {"symbol": "ETH", "condition": "above"},
    ],
)
def test_invalid_alert_payload_is_400(client, body):
    response = client.post("/api/alerts", json=body)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"
