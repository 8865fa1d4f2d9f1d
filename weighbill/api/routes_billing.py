# weighbill/api/routes_billing.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from weighbill.api.deps import get_api_client, get_ledger
from weighbill.clients.panel_api import PanelApiClient
from weighbill.core.errors import BillValidationError
from weighbill.schemas.billing import BillDraftIn
from weighbill.schemas.billing_payments import BillDetailOut, PaymentRecordOut
from weighbill.schemas.billing_results import ReturnIn
from weighbill.services.billing_calc import preview_bill
from weighbill.services.billing_invoice_create import save_bill, update_bill_from_draft
from weighbill.services.billing_math import ZERO
from weighbill.services.billing_payment_service import PaymentLedger
from weighbill.services.billing_returns import process_return
from weighbill.utils.resp import ok

router = APIRouter(prefix="/billing", tags=["Billing"])


@router.post("/preview")
def billing_preview(draft: BillDraftIn):
    return ok(preview_bill(draft))


@router.post("/bills")
def create_bill(
        draft: BillDraftIn,
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    return ok(save_bill(client, ledger, draft), status_code=201)


@router.get("/bills")
def list_bills(
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    bills = client.list_bills()
    paid_map = ledger.paid_map(b.id for b in bills)
    rows = [{
        "bill": b,
        "balance": ledger.balance(b, paid_map.get(b.id, ZERO)),
    } for b in bills]
    return ok(rows, meta={"count": len(rows)})


@router.get("/bills/{bill_id}")
def get_bill(
        bill_id: str,
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    bill = client.get_bill(bill_id)
    payments = [
        PaymentRecordOut.model_validate(p)
        for p in ledger.payments_for_bill(bill.id)
    ]
    return ok(
        BillDetailOut(bill=bill, balance=ledger.balance(bill),
                      payments=payments))


@router.put("/bills/{bill_id}")
def update_bill(
        bill_id: str,
        draft: BillDraftIn,
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    bill = update_bill_from_draft(client, ledger, bill_id, draft)
    return ok({"bill": bill, "balance": ledger.balance(bill)})


@router.delete("/bills/{bill_id}")
def delete_bill(bill_id: str,
                client: PanelApiClient = Depends(get_api_client)):
    client.delete_bill(bill_id)
    return ok({"id": bill_id})


@router.post("/bills/{bill_id}/returns")
def return_goods(
        bill_id: str,
        body: ReturnIn,
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    if body.return_qty <= 0:
        raise BillValidationError("Return quantity must be > 0",
                                  field="returnQty")
    if not body.product_name.strip():
        raise BillValidationError("Select a product to return",
                                  field="productName")

    result = process_return(client, ledger, bill_id, body.product_name,
                            body.return_qty)
    if result is None:
        raise BillValidationError("Product not found on this bill",
                                  field="productName")
    return ok(result)
