# tests/test_routes.py
from weighbill.api.deps import get_api_client

DRAFT = {
    "partyName": "Ravi Traders",
    "date": "2024-03-01",
    "items": [{"productName": "Rice", "grossWeightKg": 5, "rate": 100}],
    "hamali": 20,
    "roundedOff": -0.5,
    "paidAmount": 100,
}


def test_health(api):
    r = api.get("/")
    assert r.status_code == 200


def test_missing_token_is_401(api):
    from weighbill.main import app

    app.dependency_overrides.pop(get_api_client)
    r = api.get("/api/billing/bills", headers={"Authorization": ""})
    assert r.status_code == 401
    assert r.json()["ok"] is False
    assert r.json()["error"]["msg"] == "Not authenticated"


def test_preview(api):
    r = api.post("/api/billing/preview", json=DRAFT)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["totals"]["grandTotal"] == 519.5
    assert data["pendingAmount"] == 419.5
    assert data["status"] == "PENDING"


def test_save_validation_error(api, fake_client):
    r = api.post("/api/billing/bills", json={**DRAFT, "items": []})
    assert r.status_code == 400
    body = r.json()
    assert body["error"]["msg"] == "At least one item is required"
    assert body["error"]["code"] == "VALIDATION"
    assert fake_client.calls == []


def test_save_then_pay_then_detail(api, fake_client):
    r = api.post("/api/billing/bills", json=DRAFT)
    assert r.status_code == 201
    bill_id = r.json()["data"]["bill"]["_id"]
    assert r.json()["data"]["balance"]["pendingAmount"] == 419.5

    r = api.post("/api/billing/payments", json={"billId": bill_id, "amount": 419.5})
    assert r.status_code == 201
    assert r.json()["data"]["balance"]["status"] == "PAID"

    r = api.get(f"/api/billing/bills/{bill_id}")
    data = r.json()["data"]
    assert len(data["payments"]) == 1
    assert data["balance"]["totalPaid"] == 519.5


def test_zero_payment_rejected(api, fake_client):
    r = api.post("/api/billing/payments", json={"billId": "b1", "amount": 0})
    assert r.status_code == 400
    assert r.json()["error"]["msg"] == "Payment amount must be > 0"
    assert fake_client.calls == []


def test_remote_error_status_passes_through(api):
    r = api.get("/api/billing/bills/nope")
    assert r.status_code == 404
    assert r.json()["error"]["msg"] == "Bill not found"
    assert r.json()["error"]["code"] == "REMOTE"


def test_return_route(api, fake_client):
    bill_id = api.post("/api/billing/bills", json=DRAFT).json()["data"]["bill"]["_id"]

    r = api.post(f"/api/billing/bills/{bill_id}/returns",
                 json={"productName": "Rice", "returnQty": 1})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["returnAmount"] == 100.0
    assert data["bill"]["total"] == 419.5

    r = api.post(f"/api/billing/bills/{bill_id}/returns",
                 json={"productName": "Rice", "returnQty": 0})
    assert r.status_code == 400


def test_pending_and_export(api, fake_client):
    api.post("/api/billing/bills", json=DRAFT)

    r = api.get("/api/billing/pending", params={"search": "ravi"})
    assert r.json()["meta"]["count"] == 1
    assert r.json()["data"][0]["totalPending"] == 419.5

    r = api.get("/api/billing/pending/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    assert r.content[:2] == b"PK"


def test_low_stock_and_restock(api, fake_client):
    r = api.get("/api/inventory/low-stock")
    assert [row["name"] for row in r.json()["data"]] == ["Wheat"]

    r = api.post("/api/inventory/products/p2/restock", json={"kg": 1, "gm": 250})
    assert r.status_code == 200
    assert fake_client.stock_of("p2") == 6250

    r = api.post("/api/inventory/products/p2/restock", json={"kg": 0, "gm": 0})
    assert r.status_code == 400


def test_dashboard(api):
    api.post("/api/billing/bills", json=DRAFT)
    data = api.get("/api/dashboard").json()["data"]
    assert data["totalBills"] == 1
    assert data["totalPending"] == 419.5


def test_attendance_routes(api):
    r = api.post("/api/attendance/check-in")
    assert r.status_code == 201
    assert r.json()["data"]["userId"] == "u1"

    r = api.post("/api/attendance/check-in")
    assert r.status_code == 409

    r = api.post("/api/attendance/check-out")
    assert r.status_code == 200
    assert r.json()["data"]["checkOut"]

    r = api.get("/api/attendance")
    assert r.json()["meta"]["count"] == 1


def test_remote_low_stock_passes_through(api, fake_client):
    r = api.get("/api/inventory/low-stock/remote")
    rows = r.json()["data"]
    assert [row["name"] for row in rows] == ["Wheat"]
    assert rows[0]["label"] == "5 KG 0 GM"
