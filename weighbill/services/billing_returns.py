# weighbill/services/billing_returns.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from weighbill.schemas.billing import BillStatus, RemoteBill, RemoteBillItem, Unit, UpdateBillRequest
from weighbill.schemas.billing_results import ReturnOut
from weighbill.services.billing_calc import invoice_status, pending_amount
from weighbill.services.billing_math import D, ZERO, money2, weight3
from weighbill.services.billing_payment_service import PaymentLedger
from weighbill.services.inventory import restock_product

logger = logging.getLogger(__name__)


@dataclass
class ReturnOutcome:
    bill: RemoteBill
    item_index: int
    return_qty: Decimal
    return_amount: Decimal
    new_total: Decimal
    pending_amount: Decimal
    status: BillStatus


def find_return_item(bill: RemoteBill, product_name: str) -> Optional[int]:
    key = (product_name or "").strip().lower()
    if not key:
        return None
    for idx, it in enumerate(bill.items):
        if it.is_charge:
            continue
        if (it.product_name or "").strip().lower() == key:
            return idx
    return None


def apply_return(bill: RemoteBill, product_name: str, return_qty,
                 total_paid) -> Optional[ReturnOutcome]:
    """
    Pure: returns a modified copy of `bill`, or None when nothing applies
    (qty <= 0 or no matching product row). Over-returns clamp at zero.
    """
    qty = D(return_qty)
    if qty <= 0:
        return None
    idx = find_return_item(bill, product_name)
    if idx is None:
        return None

    updated = bill.model_copy(deep=True)
    item: RemoteBillItem = updated.items[idx]

    if item.unit == Unit.GMS:
        # quantity is in grams for Gms rows while return qty is KG
        logger.warning(
            "Return of %s KG against Gms line %r on bill %s: quantity is "
            "reduced by the KG figure", qty, item.product_name, bill.id)

    return_amount = money2(qty * D(item.price))

    item.quantity = money2(max(ZERO, D(item.quantity) - qty))
    if item.net_weight is not None:
        item.net_weight = weight3(max(ZERO, D(item.net_weight) - qty))
    else:
        item.net_weight = item.quantity
    item.total = money2(max(ZERO, D(item.total) - return_amount))

    new_total = money2(max(ZERO, D(bill.total) - return_amount))
    updated.total = new_total
    pending = pending_amount(new_total, total_paid)
    status = invoice_status(new_total, total_paid)
    updated.pending_amount = pending
    updated.status = status.value

    return ReturnOutcome(
        bill=updated,
        item_index=idx,
        return_qty=qty,
        return_amount=return_amount,
        new_total=new_total,
        pending_amount=pending,
        status=status,
    )


def process_return(client, ledger: PaymentLedger, bill_id: str,
                   product_name: str, return_qty) -> Optional[ReturnOut]:
    """
    Load -> apply -> one update call -> restock. If the update fails the
    PanelApiError propagates and no restock is issued. A failed restock is
    reported as a warning only.
    """
    bill = client.get_bill(bill_id)
    outcome = apply_return(bill, product_name, return_qty,
                           ledger.total_paid(bill))
    if outcome is None:
        return None

    req = UpdateBillRequest(
        items=outcome.bill.items,
        total=outcome.new_total,
        pending_amount=outcome.pending_amount,
        status=outcome.status,
    )
    saved = client.update_bill(bill_id, req)
    logger.info("Return on bill %s: %s KG of %s, amount %s", bill_id,
                outcome.return_qty, product_name, outcome.return_amount)

    stock = restock_product(client, outcome.bill.items[outcome.item_index].product_name,
                            outcome.return_qty)

    return ReturnOut(
        bill=saved,
        product_name=outcome.bill.items[outcome.item_index].product_name,
        return_qty=outcome.return_qty,
        return_amount=outcome.return_amount,
        balance=ledger.balance(saved),
        warnings=stock.warnings,
    )
