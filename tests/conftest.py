# tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - Local store is an in-memory SQLite DB shared across one test
# - The remote panel API is replaced by FakePanelClient (no network)
# - `fail` on the fake makes named methods raise PanelApiError
# ---------------------------------------------------------------------

from __future__ import annotations

import copy
from datetime import datetime
from itertools import count
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from weighbill.core.errors import PanelApiError
from weighbill.crud.crud_payment_records import SqlPaymentRecordStore
from weighbill.db.session import init_db
from weighbill.schemas.billing import RemoteBill
from weighbill.schemas.dashboard import DashboardOut
from weighbill.schemas.inventory import Product
from weighbill.services.billing_payment_service import PaymentLedger


# ---------- Remote API stand-in ----------
class FakePanelClient:

    def __init__(self, *, products=None, bills=None, keep_paid_amount=True):
        self.products = {p["_id"]: dict(p) for p in (products or [])}
        self.bills = {b["_id"]: dict(b) for b in (bills or [])}
        self.keep_paid_amount = keep_paid_amount
        # forces the paidAmount the remote echoes back
        self.stored_paid_amount = None
        self.fail = set()
        self.calls = []
        self.stock_patches = []
        self._ids = count(1)

    def _call(self, name):
        self.calls.append(name)
        if name in self.fail:
            raise PanelApiError(f"{name} failed", status_code=500)

    # auth
    def get_profile(self):
        self._call("get_profile")
        return {"user": {"_id": "u1", "name": "Asha"}}

    # bills
    def list_bills(self):
        self._call("list_bills")
        return [RemoteBill.model_validate(b) for b in self.bills.values()]

    def get_bill(self, bill_id):
        self._call("get_bill")
        if bill_id not in self.bills:
            raise PanelApiError("Bill not found", status_code=404)
        return RemoteBill.model_validate(copy.deepcopy(self.bills[bill_id]))

    def create_bill(self, req):
        self._call("create_bill")
        data = req.model_dump(mode="json", by_alias=True)
        data["_id"] = f"b{next(self._ids)}"
        if not self.keep_paid_amount:
            data.pop("paidAmount", None)
        elif self.stored_paid_amount is not None:
            data["paidAmount"] = self.stored_paid_amount
        self.bills[data["_id"]] = data
        return RemoteBill.model_validate(copy.deepcopy(data))

    def update_bill(self, bill_id, req):
        self._call("update_bill")
        data = self.bills[bill_id]
        data.update(req.model_dump(mode="json", by_alias=True, exclude_none=True))
        return RemoteBill.model_validate(copy.deepcopy(data))

    def delete_bill(self, bill_id):
        self._call("delete_bill")
        self.bills.pop(bill_id, None)

    # products
    def list_products(self):
        self._call("list_products")
        return [Product.model_validate(p) for p in self.products.values()]

    def get_product(self, product_id):
        self._call("get_product")
        if product_id not in self.products:
            raise PanelApiError("Product not found", status_code=404)
        return Product.model_validate(self.products[product_id])

    def patch_stock(self, product_id, req):
        self._call("patch_stock")
        self.stock_patches.append((product_id, req.stock))
        p = self.products[product_id]
        for key in ("stockKg", "stockGm", "stockGrams"):
            p.pop(key, None)
        p["stock"] = req.stock
        return {"ok": True}

    def get_low_stock(self):
        self._call("get_low_stock")
        return [
            Product.model_validate(p) for p in self.products.values()
            if int(p.get("stock", 0)) < 10000
        ]

    # dashboard
    def get_dashboard(self):
        self._call("get_dashboard")
        return DashboardOut.model_validate({
            "totalBills": len(self.bills),
            "totalProducts": len(self.products),
            "totalRevenue": 0,
            "lowStockCount": 0,
        })

    def stock_of(self, product_id):
        return int(self.products[product_id].get("stock", 0))


# ---------- Append-only list store ----------
class MemoryPaymentStore:

    def __init__(self):
        self.rows = []

    def append(self, bill_id, amount, date=None):
        row = SimpleNamespace(id=len(self.rows) + 1,
                              bill_id=bill_id,
                              amount=amount,
                              date=date or datetime(2024, 1, 1))
        self.rows.append(row)
        return row

    def list_for_bill(self, bill_id):
        return [r for r in self.rows if r.bill_id == bill_id]

    def list_all(self):
        return list(self.rows)


@pytest.fixture
def products():
    return [
        {"_id": "p1", "name": "Rice", "normalPrice": 60, "stock": 100000},
        {"_id": "p2", "name": "Wheat", "normalPrice": 40, "stockKg": 5, "stockGm": 0},
    ]


@pytest.fixture
def fake_client(products):
    return FakePanelClient(products=products)


@pytest.fixture
def memory_store():
    return MemoryPaymentStore()


@pytest.fixture
def memory_ledger(memory_store):
    return PaymentLedger(memory_store)


# ---------- Local DB ----------
@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def sql_ledger(db_session):
    return PaymentLedger(SqlPaymentRecordStore(db_session))


# ---------- HTTP ----------
@pytest.fixture
def api(fake_client, db_session):
    from fastapi.testclient import TestClient

    from weighbill.api.deps import get_api_client
    from weighbill.db.session import get_db
    from weighbill.main import app

    def _db():
        yield db_session

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_api_client] = lambda: fake_client
    client = TestClient(app, headers={"Authorization": "Bearer test-token"})
    try:
        yield client
    finally:
        app.dependency_overrides.clear()
