# weighbill/services/billing_payment_service.py
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Protocol

from weighbill.schemas.billing import BillStatus, RemoteBill
from weighbill.schemas.billing_payments import BillBalanceOut
from weighbill.services.billing_calc import invoice_status, pending_amount
from weighbill.services.billing_math import D, ZERO, money2

logger = logging.getLogger(__name__)


class PaymentRecordStore(Protocol):

    def append(self, bill_id: str, amount: Decimal,
               date: Optional[datetime] = None) -> Any:
        ...

    def list_for_bill(self, bill_id: str) -> List[Any]:
        ...

    def list_all(self) -> List[Any]:
        ...


class PaymentLedger:
    """
    Paid amount for a bill = paidAmount captured on the bill at save time
    + every payment record appended later. The two sources are always
    summed, never folded into one counter.
    """

    def __init__(self, store: PaymentRecordStore):
        self.store = store

    # -------------------------
    # Writes
    # -------------------------
    def record_payment(self, bill_id: str, amount,
                       date: Optional[datetime] = None):
        amt = money2(amount)
        bill_id = str(bill_id or "").strip()
        if not bill_id or amt <= 0:
            logger.info("Ignoring payment for bill %r with amount %s",
                        bill_id, amount)
            return None
        rec = self.store.append(bill_id, amt, date)
        logger.info("Recorded payment %s against bill %s", amt, bill_id)
        return rec

    # -------------------------
    # Reads
    # -------------------------
    def payments_for_bill(self, bill_id: str) -> List[Any]:
        return list(self.store.list_for_bill(str(bill_id)))

    def recorded_paid(self, bill_id: str) -> Decimal:
        return money2(
            sum((D(r.amount) for r in self.payments_for_bill(bill_id)), ZERO))

    def paid_map(self, bill_ids: Iterable[str]) -> Dict[str, Decimal]:
        wanted = {str(b) for b in bill_ids}
        lister = getattr(self.store, "list_for_bills", None)
        rows = lister(wanted) if lister else self.store.list_all()
        out: Dict[str, Decimal] = defaultdict(lambda: ZERO)
        for r in rows:
            if str(r.bill_id) in wanted:
                out[str(r.bill_id)] += D(r.amount)
        return {k: money2(out[k]) for k in wanted}

    def total_paid(self, bill: RemoteBill, recorded: Optional[Decimal] = None) -> Decimal:
        if recorded is None:
            recorded = self.recorded_paid(bill.id)
        return money2(D(bill.paid_amount) + D(recorded))

    def pending(self, bill: RemoteBill, recorded: Optional[Decimal] = None) -> Decimal:
        return pending_amount(bill.total, self.total_paid(bill, recorded))

    def status(self, bill: RemoteBill, recorded: Optional[Decimal] = None) -> BillStatus:
        return invoice_status(bill.total, self.total_paid(bill, recorded))

    def balance(self, bill: RemoteBill, recorded: Optional[Decimal] = None) -> BillBalanceOut:
        if recorded is None:
            recorded = self.recorded_paid(bill.id)
        total_paid = self.total_paid(bill, recorded)
        return BillBalanceOut(
            bill_id=bill.id,
            total=money2(bill.total),
            paid_at_save=money2(bill.paid_amount),
            recorded_paid=money2(recorded),
            total_paid=total_paid,
            pending_amount=pending_amount(bill.total, total_paid),
            status=invoice_status(bill.total, total_paid),
        )
