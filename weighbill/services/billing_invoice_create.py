# weighbill/services/billing_invoice_create.py
from __future__ import annotations

import logging
from datetime import date as dt_date

from sqlalchemy.exc import SQLAlchemyError

from weighbill.core.errors import BillValidationError, PanelApiError
from weighbill.schemas.billing import (
    BillDraftIn,
    CreateBillRequest,
    RemoteBill,
    UpdateBillRequest,
)
from weighbill.schemas.billing_payments import PaymentRecordOut
from weighbill.schemas.billing_results import SaveBillOut
from weighbill.services.billing_calc import (
    build_bill_items,
    compute_bill_totals,
    compute_line,
    invoice_status,
    pending_amount,
    validate_bill_draft,
)
from weighbill.services.billing_math import D, money2
from weighbill.services.billing_numbers import next_invoice_no
from weighbill.services.billing_payment_service import PaymentLedger
from weighbill.services.inventory import deduct_stock_for_bill

logger = logging.getLogger(__name__)


def save_bill(client, ledger: PaymentLedger, draft: BillDraftIn) -> SaveBillOut:
    """
    Save Bill, strictly in order:
      1. validate (no remote call on failure)
      2. create the bill        -> PanelApiError aborts everything
      3. deduct stock           -> best-effort, warnings only
      4. keep any part of the save-time payment the remote did not store
    Nothing already done is rolled back by a later step.
    """
    validate_bill_draft(draft)

    lines = [compute_line(ln) for ln in draft.items]
    totals = compute_bill_totals(lines, draft.hamali, draft.rounded_off)
    paid = money2(draft.paid_amount)
    invoice_no = draft.invoice_no or next_invoice_no(client)

    req = CreateBillRequest(
        customer_name=draft.party_name.strip(),
        invoice_no=invoice_no,
        mobile=(draft.mobile or None),
        date=draft.date or dt_date.today().isoformat(),
        items=build_bill_items(lines, totals.hamali, totals.rounded_off),
        subtotal=totals.subtotal,
        hamali=totals.hamali,
        rounded_off=totals.rounded_off,
        total=totals.grand_total,
        paid_amount=paid,
        pending_amount=pending_amount(totals.grand_total, paid),
        status=invoice_status(totals.grand_total, paid),
    )

    bill = client.create_bill(req)
    logger.info("Bill %s (invoice %s) created for %s, total %s", bill.id,
                invoice_no, req.customer_name, totals.grand_total)

    warnings = []

    stock = deduct_stock_for_bill(client, lines)
    warnings.extend(stock.warnings)

    initial_payment = None
    # remote may drop paidAmount or default it to 0
    shortfall = money2(paid - D(bill.paid_amount))
    if shortfall > 0:
        try:
            rec = ledger.record_payment(bill.id, shortfall)
        except SQLAlchemyError as e:
            msg = f"Payment of {shortfall} was not recorded: {e}"
            logger.warning(msg)
            warnings.append(msg)
        else:
            if rec is not None:
                initial_payment = PaymentRecordOut.model_validate(rec)

    return SaveBillOut(
        bill=bill,
        balance=ledger.balance(bill),
        initial_payment=initial_payment,
        warnings=warnings,
    )


def update_bill_from_draft(client, ledger: PaymentLedger, bill_id: str,
                           draft: BillDraftIn) -> RemoteBill:
    """
    Edit a saved bill: items and totals are recomputed from the draft.
    Stock is not re-synced on edit. The save-time payment is never changed
    here; later payments go through the ledger.
    """
    validate_bill_draft(draft)
    if money2(draft.paid_amount) > 0:
        raise BillValidationError(
            "Paid amount cannot be changed on edit, record a payment instead",
            field="paidAmount")

    current = client.get_bill(bill_id)
    lines = [compute_line(ln) for ln in draft.items]
    totals = compute_bill_totals(lines, draft.hamali, draft.rounded_off)

    probe = current.model_copy(update={"total": totals.grand_total})
    balance = ledger.balance(probe)

    req = UpdateBillRequest(
        customer_name=draft.party_name.strip(),
        mobile=draft.mobile,
        date=draft.date,
        invoice_no=draft.invoice_no,
        items=build_bill_items(lines, totals.hamali, totals.rounded_off),
        subtotal=totals.subtotal,
        hamali=totals.hamali,
        rounded_off=totals.rounded_off,
        total=totals.grand_total,
        pending_amount=balance.pending_amount,
        status=balance.status,
    )
    try:
        return client.update_bill(bill_id, req)
    except PanelApiError:
        logger.error("Bill %s update rejected by server", bill_id)
        raise
