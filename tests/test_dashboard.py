# tests/test_dashboard.py
from decimal import Decimal

from weighbill.schemas.billing import RemoteBill
from weighbill.services.dashboard_service import (
    customer_pending_summary,
    dashboard_summary,
    total_pending,
)


def _bills():
    raw = [
        {"_id": "b1", "customerName": "Ravi", "invoiceNo": "1", "total": 1000, "paidAmount": 400},
        {"_id": "b2", "customerName": "Ravi", "invoiceNo": "2", "total": 500, "paidAmount": 0},
        {"_id": "b3", "customerName": "Meena", "invoiceNo": "3", "total": 300, "paidAmount": 300},
        {"_id": "b4", "customerName": "", "invoiceNo": "4", "total": 100},
    ]
    return [RemoteBill.model_validate(b) for b in raw]


def test_pending_grouped_by_customer(memory_ledger):
    memory_ledger.record_payment("b1", 100)
    customers = customer_pending_summary(_bills(), memory_ledger)

    names = [c.name for c in customers]
    assert names == ["Ravi", "Unknown"]

    ravi = customers[0]
    assert [b.id for b in ravi.bills] == ["b1", "b2"]
    assert ravi.total_amount == Decimal("1500.00")
    assert ravi.total_paid == Decimal("500.00")
    assert ravi.total_pending == Decimal("1000.00")


def test_fully_paid_after_payment_drops_out(memory_ledger):
    memory_ledger.record_payment("b2", 500)
    customers = customer_pending_summary(_bills(), memory_ledger)
    assert [b.id for b in customers[0].bills] == ["b1"]


def test_search_is_case_insensitive(memory_ledger):
    customers = customer_pending_summary(_bills(), memory_ledger, search=" rAV ")
    assert [c.name for c in customers] == ["Ravi"]


def test_total_pending(memory_ledger):
    assert total_pending(_bills(), memory_ledger) == Decimal("1200.00")


def test_dashboard_adds_local_pending(fake_client, memory_ledger):
    for b in _bills():
        fake_client.bills[b.id] = b.model_dump(mode="json", by_alias=True)
    dash = dashboard_summary(fake_client, memory_ledger)
    assert dash.total_bills == 4
    assert dash.total_products == 2
    assert dash.total_pending == Decimal("1200.00")
