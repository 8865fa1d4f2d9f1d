# weighbill/utils/timezone.py
from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Naive datetime holding current UTC time.
    DateTime columns in the local store are naive.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
