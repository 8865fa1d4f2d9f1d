# weighbill/schemas/billing_results.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from weighbill.schemas.billing import RemoteBill
from weighbill.schemas.billing_payments import BillBalanceOut, PaymentRecordOut
from weighbill.schemas.common import CamelModel, Num


class SaveBillOut(CamelModel):
    bill: RemoteBill
    balance: BillBalanceOut
    initial_payment: Optional[PaymentRecordOut] = None
    warnings: List[str] = Field(default_factory=list)


class ReturnIn(CamelModel):
    product_name: str = ""
    # KG of net weight
    return_qty: Num = Decimal("0")


class ReturnOut(CamelModel):
    bill: RemoteBill
    product_name: str
    return_qty: Num
    return_amount: Num
    balance: BillBalanceOut
    warnings: List[str] = Field(default_factory=list)
