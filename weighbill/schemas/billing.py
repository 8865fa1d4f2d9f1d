# weighbill/schemas/billing.py
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from weighbill.schemas.common import CamelModel, NonNeg, Num

GENERAL_CATEGORY = "general"
CHARGES_CATEGORY = "charges"
HAMALI_LABEL = "Hamali"
ROUNDED_OFF_LABEL = "Rounded Off"


class Unit(str, Enum):
    KGS = "Kgs"
    GMS = "Gms"


class BillStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"


# -------------------------
# Entry form
# -------------------------
class BillLineIn(CamelModel):
    product_name: str = ""
    gross_weight_kg: NonNeg = Decimal("0")
    gross_weight_gm: NonNeg = Decimal("0")
    less_weight_kg: NonNeg = Decimal("0")
    less_weight_gm: NonNeg = Decimal("0")
    unit: Unit = Unit.KGS
    rate: NonNeg = Decimal("0")

    @field_validator("product_name", mode="before")
    @classmethod
    def _name(cls, v):
        return "" if v is None else str(v)

    @field_validator("unit", mode="before")
    @classmethod
    def _unit(cls, v):
        return v or Unit.KGS


class BillLineOut(BillLineIn):
    net_weight: Num = Decimal("0")
    amount: Num = Decimal("0")
    quantity: Num = Decimal("0")


class BillDraftIn(CamelModel):
    party_name: str = ""
    mobile: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD
    invoice_no: Optional[str] = None
    items: List[BillLineIn] = Field(default_factory=list)
    hamali: NonNeg = Decimal("0")
    rounded_off: Num = Decimal("0")
    paid_amount: NonNeg = Decimal("0")

    @field_validator("party_name", mode="before")
    @classmethod
    def _party(cls, v):
        return "" if v is None else str(v)

    @field_validator("invoice_no", mode="before")
    @classmethod
    def _inv_no(cls, v):
        if v is None:
            return None
        s = str(v).strip()
        return s or None


class BillTotals(CamelModel):
    subtotal: Num = Decimal("0")
    hamali: Num = Decimal("0")
    rounded_off: Num = Decimal("0")
    grand_total: Num = Decimal("0")


class BillPreviewOut(CamelModel):
    items: List[BillLineOut]
    totals: BillTotals
    paid_amount: Num = Decimal("0")
    pending_amount: Num = Decimal("0")
    status: BillStatus


# -------------------------
# Remote wire shapes
# -------------------------
class RemoteBillItem(CamelModel):
    model_config = ConfigDict(extra="allow")

    product_name: str = ""
    category: str = GENERAL_CATEGORY
    unit: Optional[Unit] = None
    price: Num = Decimal("0")
    quantity: Num = Decimal("0")
    net_weight: Optional[Num] = None
    total: Num = Decimal("0")

    @property
    def is_charge(self) -> bool:
        return (self.category or "").strip().lower() == CHARGES_CATEGORY


class CreateBillRequest(CamelModel):
    customer_name: str = Field(..., min_length=1)
    customer_type: str = "normal"
    discount: Num = Decimal("0")
    invoice_no: str
    mobile: Optional[str] = None
    date: Optional[str] = None
    items: List[RemoteBillItem] = Field(..., min_length=1)
    subtotal: Num
    hamali: Num = Decimal("0")
    rounded_off: Num = Decimal("0")
    total: Num
    paid_amount: NonNeg = Decimal("0")
    pending_amount: NonNeg = Decimal("0")
    status: BillStatus


class UpdateBillRequest(CamelModel):
    """Partial update. Dump with exclude_none."""
    customer_name: Optional[str] = None
    mobile: Optional[str] = None
    date: Optional[str] = None
    invoice_no: Optional[str] = None
    items: Optional[List[RemoteBillItem]] = None
    subtotal: Optional[Num] = None
    hamali: Optional[Num] = None
    rounded_off: Optional[Num] = None
    total: Optional[Num] = None
    pending_amount: Optional[Num] = None
    status: Optional[BillStatus] = None


class RemoteBill(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., alias="_id")
    customer_name: str = ""
    customer_type: Optional[str] = None
    invoice_no: Optional[str] = None
    mobile: Optional[str] = None
    date: Optional[str] = None
    items: List[RemoteBillItem] = Field(default_factory=list)
    subtotal: Optional[Num] = None
    total: Num = Decimal("0")
    # None when the remote did not store it
    paid_amount: Optional[Num] = None
    pending_amount: Optional[Num] = None
    status: Optional[str] = None
    created_at: Optional[str] = None

    @field_validator("id", "invoice_no", mode="before")
    @classmethod
    def _as_str(cls, v):
        return None if v is None else str(v)

    @field_validator("customer_name", mode="before")
    @classmethod
    def _cust(cls, v):
        return "" if v is None else str(v)
