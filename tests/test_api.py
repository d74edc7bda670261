import pytest
from fastapi.testclient import TestClient

from vending_fsm.core.machine import VendingMachine
from vending_fsm.main import MachineService, app, get_service


@pytest.fixture
def client():
    service = MachineService(VendingMachine(inventory=10, item_price=10))
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "running"
    assert client.get("/health").json() == {"status": "healthy"}


def test_get_machine_starts_idle(client):
    body = client.get("/machine").json()
    assert body["state"] == "IDLE"
    assert body["inventory"] == 10
    assert body["balance"] == 0
    assert body["summary"] == "Stock remaining: 10\nCurrent balance: 0"


def test_purchase_over_http_cascades(client):
    r = client.post("/machine/select", json={"item": "Soda"})
    assert r.status_code == 200
    assert r.json()["outcome"]["kind"] == "ACCEPTED"
    assert r.json()["machine"]["selected_item"] == "Soda"

    r = client.post("/machine/coins", json={"amount": 50})
    body = r.json()
    assert body["outcome"]["kind"] == "ACCEPTED"
    assert body["outcome"]["followed_by"]["from_state"] == "DISPENSING"
    assert body["outcome"]["to_state"] == "IDLE"
    assert body["machine"]["inventory"] == 9
    assert body["machine"]["balance"] == 40


def test_rejections_still_return_200(client):
    r = client.post("/machine/coins", json={"amount": 5})
    assert r.status_code == 200
    assert r.json()["outcome"]["kind"] == "REJECTED_WRONG_STATE"
    assert r.json()["machine"]["balance"] == 0

    client.post("/machine/select", json={"item": "Soda"})
    r = client.post("/machine/dispense")
    assert r.json()["outcome"]["kind"] == "REJECTED_INSUFFICIENT_FUNDS"


def test_out_of_order_is_absorbing(client):
    r = client.post("/machine/out-of-order")
    assert r.json()["outcome"]["kind"] == "ACCEPTED"
    assert r.json()["machine"]["state"] == "OUT_OF_ORDER"

    r = client.post("/machine/out-of-order")
    assert r.json()["outcome"]["kind"] == "REJECTED_OUT_OF_ORDER"
    r = client.post("/machine/select", json={"item": "Chips"})
    assert r.json()["outcome"]["kind"] == "REJECTED_OUT_OF_ORDER"
    assert client.get("/machine").json()["state"] == "OUT_OF_ORDER"


def test_history_endpoint(client):
    client.post("/machine/select", json={"item": "Soda"})
    client.post("/machine/coins", json={"amount": 10})
    body = client.get("/machine/history").json()
    assert body["current_state"] == "IDLE"
    assert body["event_count"] == 3
    assert [e["event"] for e in body["events"]] == [
        "ITEM_SELECTED",
        "FUNDS_SUFFICIENT",
        "ITEM_DISPENSED",
    ]


def test_malformed_body_is_422(client):
    assert client.post("/machine/coins", json={"amount": "lots"}).status_code == 422
    assert client.post("/machine/select", json={}).status_code == 422
