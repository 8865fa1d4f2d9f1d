# weighbill/core/errors.py
from __future__ import annotations

from typing import Optional


class BillValidationError(ValueError):
    """Bill draft rejected before any remote call."""

    def __init__(self, msg: str, *, field: Optional[str] = None):
        super().__init__(msg)
        self.msg = msg
        self.field = field


class PanelApiError(RuntimeError):
    """
    Remote persistence API failed (transport error or non-2xx).
    status_code is None when no response was received.
    """

    def __init__(self, msg: str = "Request failed", *, status_code: Optional[int] = None):
        super().__init__(msg)
        self.msg = msg
        self.status_code = status_code


class AttendanceError(ValueError):
    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg
