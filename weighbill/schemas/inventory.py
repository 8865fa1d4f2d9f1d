# weighbill/schemas/inventory.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator

from weighbill.schemas.common import CamelModel, NonNeg, Num
from weighbill.services.billing_math import D, kg_to_grams

Grams = int


def _stock_grams_from_payload(data: dict) -> int:
    """
    Stock arrives either as `stock` (integer grams) or as the older
    `stockKg` + `stockGm` split. Result is always integer grams.
    """
    if "stockGrams" in data or "stock_grams" in data:
        raw = data.get("stockGrams", data.get("stock_grams"))
        return max(0, int(D(raw)))
    if "stockKg" in data or "stockGm" in data:
        grams = kg_to_grams(data.get("stockKg")) + int(D(data.get("stockGm")))
        return max(0, grams)
    return max(0, int(D(data.get("stock"))))


class Product(CamelModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., alias="_id")
    name: str = ""
    buying_price: Num = Decimal("0")
    normal_price: Num = Decimal("0")
    retailer_price: Num = Decimal("0")
    category: Optional[str] = None
    code: Optional[str] = None
    stock_grams: Grams = 0

    @model_validator(mode="before")
    @classmethod
    def _normalize_stock(cls, data: Any):
        if isinstance(data, dict):
            data = dict(data)
            data["stockGrams"] = _stock_grams_from_payload(data)
            data.pop("stock_grams", None)
            if "_id" not in data and "id" in data:
                data["_id"] = data.pop("id")
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v):
        return None if v is None else str(v)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v):
        return "" if v is None else str(v)


class ProductIn(CamelModel):
    """Create/update payload. Stock goes out as grams under `stock`."""
    name: str = Field(..., min_length=1)
    buying_price: NonNeg = Decimal("0")
    normal_price: NonNeg = Decimal("0")
    retailer_price: NonNeg = Decimal("0")
    category: Optional[str] = None
    code: Optional[str] = None
    stock: Grams = Field(0, ge=0)


class StockPatchRequest(CamelModel):
    stock: Grams = Field(..., ge=0)


class ManualRestockIn(CamelModel):
    kg: NonNeg = Decimal("0")
    gm: NonNeg = Decimal("0")


class StockChange(CamelModel):
    product_id: str
    name: str
    before_grams: Grams
    after_grams: Grams


class StockSyncReport(CamelModel):
    changes: List[StockChange] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


class LowStockRow(CamelModel):
    id: str
    name: str
    stock_kg: int
    stock_gm: int
    total_kg: Num
    label: str
