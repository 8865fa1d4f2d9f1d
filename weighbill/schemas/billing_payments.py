# weighbill/schemas/billing_payments.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from weighbill.schemas.billing import BillStatus, RemoteBill
from weighbill.schemas.common import CamelModel, Num


class PaymentRecordIn(CamelModel):
    bill_id: str
    # validated by the ledger, not here: <= 0 is a no-op there
    amount: Num = Decimal("0")
    date: Optional[datetime] = None


class PaymentRecordOut(CamelModel):
    id: int
    bill_id: str
    amount: Num
    date: datetime


class BillBalanceOut(CamelModel):
    bill_id: str
    total: Num
    paid_at_save: Num
    recorded_paid: Num
    total_paid: Num
    pending_amount: Num
    status: BillStatus


class BillDetailOut(CamelModel):
    bill: RemoteBill
    balance: BillBalanceOut
    payments: List[PaymentRecordOut] = Field(default_factory=list)
