# weighbill/services/inventory.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from weighbill.core.config import settings
from weighbill.core.errors import PanelApiError
from weighbill.schemas.billing import BillLineOut
from weighbill.schemas.inventory import (
    LowStockRow,
    Product,
    StockChange,
    StockPatchRequest,
    StockSyncReport,
)
from weighbill.services.billing_math import D, grams_to_kg, kg_to_grams, money2, non_negative

logger = logging.getLogger(__name__)


# -------------------------
# Unit conversion (boundary only)
# -------------------------
def kg_gm_to_grams(kg, gm) -> int:
    return max(0, kg_to_grams(non_negative(kg)) + int(non_negative(gm)))


def grams_to_kg_gm(grams: int) -> Tuple[int, int]:
    g = max(0, int(grams or 0))
    return g // 1000, g % 1000


def total_stock_kg(grams: int) -> Decimal:
    return money2(grams_to_kg(max(0, int(grams or 0))))


def format_stock(grams: int) -> str:
    kg, gm = grams_to_kg_gm(grams)
    return f"{kg} KG {gm} GM"


# -------------------------
# Low stock
# -------------------------
def is_low_stock(product: Product, threshold: Optional[int] = None) -> bool:
    limit = settings.LOW_STOCK_THRESHOLD_GRAMS if threshold is None else int(threshold)
    return int(product.stock_grams) < limit


def low_stock_products(products: Iterable[Product],
                       threshold: Optional[int] = None) -> List[Product]:
    return [p for p in products if is_low_stock(p, threshold)]


def stock_rows(products: Iterable[Product]) -> List[LowStockRow]:
    rows = []
    for p in products:
        kg, gm = grams_to_kg_gm(p.stock_grams)
        rows.append(
            LowStockRow(
                id=p.id,
                name=p.name,
                stock_kg=kg,
                stock_gm=gm,
                total_kg=total_stock_kg(p.stock_grams),
                label=format_stock(p.stock_grams),
            ))
    return rows


def low_stock_rows(products: Iterable[Product],
                   threshold: Optional[int] = None) -> List[LowStockRow]:
    return stock_rows(low_stock_products(products, threshold))


# -------------------------
# Lookup
# -------------------------
def _norm(name: str) -> str:
    return (name or "").strip().lower()


def find_product(products: Sequence[Product], name: str) -> Optional[Product]:
    key = _norm(name)
    if not key:
        return None
    for p in products:
        if _norm(p.name) == key:
            return p
    return None


# -------------------------
# Stock movements
# -------------------------
def _apply_delta(client, product: Product, delta_grams: int,
                 report: StockSyncReport) -> None:
    before = int(product.stock_grams)
    after = max(0, before + int(delta_grams))
    try:
        client.patch_stock(product.id, StockPatchRequest(stock=after))
    except PanelApiError as e:
        msg = f"Stock update failed for {product.name}: {e.msg}"
        logger.warning(msg)
        report.warnings.append(msg)
        return
    product.stock_grams = after
    report.changes.append(
        StockChange(product_id=product.id,
                    name=product.name,
                    before_grams=before,
                    after_grams=after))


def _load_products(client, report: StockSyncReport) -> Optional[List[Product]]:
    try:
        return client.list_products()
    except PanelApiError as e:
        msg = f"Stock sync skipped, could not load products: {e.msg}"
        logger.warning(msg)
        report.warnings.append(msg)
        return None


def deduct_stock_for_bill(client, lines: Iterable[BillLineOut]) -> StockSyncReport:
    """
    Best-effort: subtract each line's net weight (as grams) from the matching
    product. Unmatched names and failed patches become warnings; nothing
    here raises for remote errors.
    """
    report = StockSyncReport()
    lines = [ln for ln in lines if D(ln.net_weight) > 0]
    if not lines:
        return report

    products = _load_products(client, report)
    if products is None:
        return report

    for ln in lines:
        product = find_product(products, ln.product_name)
        if product is None:
            msg = f"Product not found in catalog: {ln.product_name}"
            logger.warning(msg)
            report.warnings.append(msg)
            continue
        _apply_delta(client, product, -kg_to_grams(ln.net_weight), report)

    return report


def restock_product(client, product_name: str, kg) -> StockSyncReport:
    """Add `kg` back to the named product (returns-driven restock)."""
    report = StockSyncReport()
    grams = kg_to_grams(non_negative(kg))
    if grams <= 0:
        return report

    products = _load_products(client, report)
    if products is None:
        return report

    product = find_product(products, product_name)
    if product is None:
        msg = f"Product not found in catalog: {product_name}"
        logger.warning(msg)
        report.warnings.append(msg)
        return report

    _apply_delta(client, product, grams, report)
    return report


def manual_restock(client, product_id: str, kg=0, gm=0) -> StockSyncReport:
    """
    Explicit restock from the inventory screen. Errors here are the
    primary action, so the remote error propagates.
    """
    report = StockSyncReport()
    grams = kg_gm_to_grams(kg, gm)
    product = client.get_product(product_id)
    if grams <= 0:
        return report
    after = int(product.stock_grams) + grams
    client.patch_stock(product.id, StockPatchRequest(stock=after))
    report.changes.append(
        StockChange(product_id=product.id,
                    name=product.name,
                    before_grams=int(product.stock_grams),
                    after_grams=after))
    logger.info("Restocked %s by %s g", product.name, grams)
    return report
