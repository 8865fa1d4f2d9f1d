# weighbill/api/deps.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from weighbill.clients.panel_api import PanelApiClient
from weighbill.crud.crud_payment_records import SqlPaymentRecordStore
from weighbill.db.session import get_db
from weighbill.services.billing_payment_service import PaymentLedger


def _extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def get_api_client(authorization: Optional[str] = Header(
        default=None)) -> PanelApiClient:
    """The caller's bearer token is forwarded to the remote API as-is."""
    token = _extract_bearer(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return PanelApiClient(token)


def get_ledger(db: Session = Depends(get_db)) -> PaymentLedger:
    return PaymentLedger(SqlPaymentRecordStore(db))


def current_user(client: PanelApiClient = Depends(get_api_client)) -> Dict[str, Any]:
    profile = client.get_profile()
    user = profile.get("user") if isinstance(profile.get("user"), dict) else profile
    if not (user.get("_id") or user.get("id")):
        raise HTTPException(status_code=401, detail="Invalid token")
    return user
