# weighbill/services/billing_numbers.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from weighbill.core.errors import PanelApiError
from weighbill.schemas.billing import RemoteBill

logger = logging.getLogger(__name__)


def _as_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def next_invoice_no_from(bills: Iterable[RemoteBill]) -> str:
    nums = [n for n in (_as_int(b.invoice_no) for b in bills) if n is not None]
    return str(max(nums) + 1 if nums else 1)


def fallback_invoice_no(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%y%m%d%H%M%S")


def next_invoice_no(client, *, now: Optional[datetime] = None) -> str:
    try:
        bills = client.list_bills()
    except PanelApiError as e:
        logger.warning("Bill listing failed (%s); using timestamp invoice no",
                       e.msg)
        return fallback_invoice_no(now)
    return next_invoice_no_from(bills)
