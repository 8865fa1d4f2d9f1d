# weighbill/api/routes_billing_payments.py
from __future__ import annotations

from io import BytesIO

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from weighbill.api.deps import get_api_client, get_ledger
from weighbill.clients.panel_api import PanelApiClient
from weighbill.core.errors import BillValidationError
from weighbill.schemas.billing_payments import PaymentRecordIn, PaymentRecordOut
from weighbill.services.billing_math import money2
from weighbill.services.billing_payment_service import PaymentLedger
from weighbill.services.dashboard_service import customer_pending_summary
from weighbill.services.excel_export import build_customer_pending_excel
from weighbill.utils.resp import ok

router = APIRouter(prefix="/billing", tags=["Billing Payments"])

XLSX_MEDIA = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post("/payments")
def record_payment(
        body: PaymentRecordIn,
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    if money2(body.amount) <= 0:
        raise BillValidationError("Payment amount must be > 0",
                                  field="amount")

    bill = client.get_bill(body.bill_id)
    rec = ledger.record_payment(bill.id, body.amount, body.date)
    return ok(
        {
            "payment": PaymentRecordOut.model_validate(rec),
            "balance": ledger.balance(bill),
        },
        status_code=201,
    )


@router.get("/pending")
def pending_customers(
        search: str = Query(""),
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    customers = customer_pending_summary(client.list_bills(), ledger, search)
    return ok(customers, meta={"count": len(customers)})


@router.get("/pending/export")
def export_pending(
        search: str = Query(""),
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    customers = customer_pending_summary(client.list_bills(), ledger, search)
    buf = BytesIO()
    build_customer_pending_excel(buf, customers)
    buf.seek(0)
    return StreamingResponse(
        buf,
        media_type=XLSX_MEDIA,
        headers={
            "Content-Disposition":
            'attachment; filename="Pending_Payments.xlsx"'
        },
    )
