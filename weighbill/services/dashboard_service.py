# weighbill/services/dashboard_service.py
from __future__ import annotations

from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from weighbill.schemas.billing import RemoteBill
from weighbill.schemas.dashboard import CustomerPendingOut, DashboardOut, PendingBillRow
from weighbill.services.billing_math import D, ZERO, money2
from weighbill.services.billing_payment_service import PaymentLedger


def customer_pending_summary(
    bills: Iterable[RemoteBill],
    ledger: PaymentLedger,
    search: str = "",
    paid_map: Optional[Dict[str, Decimal]] = None,
) -> List[CustomerPendingOut]:
    """
    Group bills that still have something pending by customer name.
    Fully paid bills are left out entirely.
    """
    bills = list(bills)
    if paid_map is None:
        paid_map = ledger.paid_map(b.id for b in bills)

    customers: "OrderedDict[str, CustomerPendingOut]" = OrderedDict()
    for bill in bills:
        recorded = paid_map.get(bill.id, ZERO)
        pending = ledger.pending(bill, recorded)
        if pending <= 0:
            continue

        name = (bill.customer_name or "").strip() or "Unknown"
        c = customers.get(name)
        if c is None:
            c = customers[name] = CustomerPendingOut(name=name)

        paid = ledger.total_paid(bill, recorded)
        c.bills.append(
            PendingBillRow(
                id=bill.id,
                invoice_no=bill.invoice_no,
                date=bill.date or bill.created_at,
                total=money2(bill.total),
                paid=paid,
                pending=pending,
            ))
        c.total_amount = money2(D(c.total_amount) + D(bill.total))
        c.total_paid = money2(D(c.total_paid) + paid)
        c.total_pending = money2(D(c.total_pending) + pending)

    needle = (search or "").strip().lower()
    return [c for c in customers.values() if needle in c.name.lower()]


def total_pending(bills: Iterable[RemoteBill], ledger: PaymentLedger) -> Decimal:
    bills = list(bills)
    paid_map = ledger.paid_map(b.id for b in bills)
    return money2(
        sum((ledger.pending(b, paid_map.get(b.id, ZERO)) for b in bills), ZERO))


def dashboard_summary(client, ledger: PaymentLedger) -> DashboardOut:
    dash = client.get_dashboard()
    dash.total_pending = total_pending(client.list_bills(), ledger)
    return dash
