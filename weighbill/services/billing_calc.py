# weighbill/services/billing_calc.py
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Sequence, Tuple

from weighbill.core.errors import BillValidationError
from weighbill.schemas.billing import (
    CHARGES_CATEGORY,
    GENERAL_CATEGORY,
    HAMALI_LABEL,
    ROUNDED_OFF_LABEL,
    BillDraftIn,
    BillLineIn,
    BillLineOut,
    BillPreviewOut,
    BillStatus,
    BillTotals,
    RemoteBill,
    RemoteBillItem,
)
from weighbill.services.billing_math import (
    D,
    ZERO,
    display_quantity,
    line_amount,
    money2,
    net_weight,
    non_negative,
    weight3,
)


def compute_line(line: BillLineIn) -> BillLineOut:
    nw = net_weight(line.gross_weight_kg, line.gross_weight_gm,
                    line.less_weight_kg, line.less_weight_gm)
    return BillLineOut(
        **line.model_dump(),
        net_weight=nw,
        amount=line_amount(nw, line.rate),
        quantity=display_quantity(nw, line.unit),
    )


def compute_bill_totals(lines: Iterable[BillLineOut], hamali,
                        rounded_off) -> BillTotals:
    # hamali / rounded off are charges, never part of subtotal
    subtotal = money2(sum((D(ln.amount) for ln in lines), ZERO))
    hamali = money2(non_negative(hamali))
    rounded_off = money2(rounded_off)
    return BillTotals(
        subtotal=subtotal,
        hamali=hamali,
        rounded_off=rounded_off,
        grand_total=money2(subtotal + hamali + rounded_off),
    )


def pending_amount(total, paid) -> Decimal:
    return money2(max(ZERO, D(total) - D(paid)))


def invoice_status(total, paid) -> BillStatus:
    return BillStatus.PENDING if pending_amount(total, paid) > 0 else BillStatus.PAID


def validate_bill_draft(draft: BillDraftIn) -> None:
    if not draft.party_name.strip():
        raise BillValidationError("Party name is required", field="partyName")
    if not draft.items:
        raise BillValidationError("At least one item is required", field="items")
    if any(not ln.product_name.strip() for ln in draft.items):
        raise BillValidationError("All products must have a name",
                                  field="items")


def build_bill_items(lines: Sequence[BillLineOut], hamali,
                     rounded_off) -> List[RemoteBillItem]:
    """
    Persisted item list: one row per product, then Hamali / Rounded Off
    as `charges` rows for record keeping.
    """
    items = [
        RemoteBillItem(
            product_name=ln.product_name.strip(),
            category=GENERAL_CATEGORY,
            unit=ln.unit,
            price=ln.rate,
            quantity=ln.quantity,
            net_weight=weight3(ln.net_weight),
            total=ln.amount,
        ) for ln in lines
    ]

    hamali = money2(non_negative(hamali))
    rounded_off = money2(rounded_off)
    if hamali > 0:
        items.append(
            RemoteBillItem(product_name=HAMALI_LABEL,
                           category=CHARGES_CATEGORY,
                           price=hamali,
                           quantity=Decimal("1"),
                           total=hamali))
    if rounded_off != 0:
        items.append(
            RemoteBillItem(product_name=ROUNDED_OFF_LABEL,
                           category=CHARGES_CATEGORY,
                           price=rounded_off,
                           quantity=Decimal("1"),
                           total=rounded_off))
    return items


def split_bill_items(
    items: Iterable[RemoteBillItem]
) -> Tuple[List[RemoteBillItem], List[RemoteBillItem]]:
    products, charges = [], []
    for it in items:
        (charges if it.is_charge else products).append(it)
    return products, charges


def bill_subtotal(bill: RemoteBill) -> Decimal:
    products, _ = split_bill_items(bill.items)
    return money2(sum((D(it.total) for it in products), ZERO))


def bill_charges(bill: RemoteBill) -> Decimal:
    _, charges = split_bill_items(bill.items)
    return money2(sum((D(it.total) for it in charges), ZERO))


def preview_bill(draft: BillDraftIn) -> BillPreviewOut:
    lines = [compute_line(ln) for ln in draft.items]
    totals = compute_bill_totals(lines, draft.hamali, draft.rounded_off)
    paid = money2(draft.paid_amount)
    return BillPreviewOut(
        items=lines,
        totals=totals,
        paid_amount=paid,
        pending_amount=pending_amount(totals.grand_total, paid),
        status=invoice_status(totals.grand_total, paid),
    )
