# weighbill/api/routes_dashboard.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from weighbill.api.deps import get_api_client, get_ledger
from weighbill.clients.panel_api import PanelApiClient
from weighbill.services.billing_payment_service import PaymentLedger
from weighbill.services.dashboard_service import dashboard_summary
from weighbill.utils.resp import ok

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("")
def get_dashboard(
        client: PanelApiClient = Depends(get_api_client),
        ledger: PaymentLedger = Depends(get_ledger),
):
    return ok(dashboard_summary(client, ledger))
