# tests/test_payment_ledger.py
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from weighbill.schemas.billing import BillStatus, RemoteBill


def _bill(**kw):
    data = {"_id": "b1", "customerName": "Ravi", "total": 1000, "paidAmount": 400}
    data.update(kw)
    return RemoteBill.model_validate(data)


def test_recorded_payments_add_to_save_time_payment(memory_ledger):
    bill = _bill()
    memory_ledger.record_payment("b1", 300)

    bal = memory_ledger.balance(bill)
    assert bal.paid_at_save == Decimal("400.00")
    assert bal.recorded_paid == Decimal("300.00")
    assert bal.total_paid == Decimal("700.00")
    assert bal.pending_amount == Decimal("300.00")
    assert bal.status == BillStatus.PENDING

    memory_ledger.record_payment("b1", 300)
    bal = memory_ledger.balance(bill)
    assert bal.pending_amount == Decimal("0.00")
    assert bal.status == BillStatus.PAID


def test_non_positive_amounts_are_ignored(memory_ledger, memory_store):
    assert memory_ledger.record_payment("b1", 0) is None
    assert memory_ledger.record_payment("b1", -5) is None
    assert memory_ledger.record_payment("", 50) is None
    assert memory_store.rows == []


def test_status_is_stable_across_reads(memory_ledger):
    bill = _bill()
    memory_ledger.record_payment("b1", 100)
    first = memory_ledger.balance(bill)
    second = memory_ledger.balance(bill)
    assert first == second


def test_missing_paid_amount_counts_as_zero(memory_ledger):
    bill = _bill(paidAmount=None)
    assert memory_ledger.total_paid(bill) == Decimal("0.00")
    assert memory_ledger.pending(bill) == Decimal("1000.00")


def test_paid_map_only_covers_requested_bills(memory_ledger):
    memory_ledger.record_payment("b1", 100)
    memory_ledger.record_payment("b1", 50)
    memory_ledger.record_payment("b2", 70)

    paid = memory_ledger.paid_map(["b1", "b3"])
    assert paid == {"b1": Decimal("150.00"), "b3": Decimal("0.00")}


def test_sql_store_keeps_every_record(sql_ledger):
    sql_ledger.record_payment("b1", "120.50")
    sql_ledger.record_payment("b1", 79.5)
    sql_ledger.record_payment("b2", 10)

    rows = sql_ledger.payments_for_bill("b1")
    assert len(rows) == 2
    assert sql_ledger.recorded_paid("b1") == Decimal("200.00")
    assert sql_ledger.paid_map(["b1", "b2"]) == {
        "b1": Decimal("200.00"),
        "b2": Decimal("10.00"),
    }


def test_sql_record_defaults_to_current_utc(sql_ledger):
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    rec = sql_ledger.record_payment("b1", 10)
    after = datetime.now(timezone.utc).replace(tzinfo=None)

    assert rec.date.tzinfo is None
    assert before - timedelta(seconds=1) <= rec.date <= after + timedelta(seconds=1)
