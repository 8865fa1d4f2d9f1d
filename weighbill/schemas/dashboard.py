# weighbill/schemas/dashboard.py
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict, Field

from weighbill.schemas.common import CamelModel, Num


class DashboardOut(CamelModel):
    model_config = ConfigDict(extra="allow")

    total_bills: int = 0
    total_products: int = 0
    total_revenue: Num = Decimal("0")
    low_stock_count: int = 0
    # computed locally from bills + ledger
    total_pending: Num = Decimal("0")


class PendingBillRow(CamelModel):
    id: str
    invoice_no: Optional[str] = None
    date: Optional[str] = None
    total: Num
    paid: Num
    pending: Num


class CustomerPendingOut(CamelModel):
    name: str
    bills: List[PendingBillRow] = Field(default_factory=list)
    total_amount: Num = Decimal("0")
    total_paid: Num = Decimal("0")
    total_pending: Num = Decimal("0")
