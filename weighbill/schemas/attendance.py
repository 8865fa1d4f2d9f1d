# weighbill/schemas/attendance.py
from __future__ import annotations

from typing import Optional

from weighbill.schemas.common import CamelModel


class PunchOut(CamelModel):
    id: int
    user_id: str
    user_name: Optional[str] = None
    date: str
    check_in: str
    check_out: Optional[str] = None
