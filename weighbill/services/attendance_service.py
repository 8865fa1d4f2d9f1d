# weighbill/services/attendance_service.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from weighbill.core.errors import AttendanceError
from weighbill.crud import crud_attendance
from weighbill.models.attendance import AttendancePunch

logger = logging.getLogger(__name__)


def _user_id(user: Dict[str, Any]) -> str:
    uid = user.get("_id") or user.get("id")
    if not uid:
        raise AttendanceError("Unknown user")
    return str(uid)


def check_in(db: Session, user: Dict[str, Any],
             now: Optional[datetime] = None) -> AttendancePunch:
    now = now or datetime.now()
    uid = _user_id(user)
    today = now.strftime("%Y-%m-%d")
    if crud_attendance.get_punch(db, user_id=uid, on_date=today):
        raise AttendanceError("Already checked in today")
    punch = crud_attendance.create_punch(db,
                                         user_id=uid,
                                         user_name=user.get("name"),
                                         on_date=today,
                                         check_in=now.strftime("%H:%M"))
    logger.info("User %s checked in at %s", uid, punch.check_in)
    return punch


def check_out(db: Session, user: Dict[str, Any],
              now: Optional[datetime] = None) -> AttendancePunch:
    now = now or datetime.now()
    uid = _user_id(user)
    today = now.strftime("%Y-%m-%d")
    punch = crud_attendance.get_punch(db, user_id=uid, on_date=today)
    if punch is None or punch.check_out:
        raise AttendanceError("No open check-in for today")
    return crud_attendance.close_punch(db, punch, check_out=now.strftime("%H:%M"))


def list_for_user(db: Session, user: Dict[str, Any],
                  limit: int = 30) -> List[AttendancePunch]:
    return crud_attendance.list_punches(db, user_id=_user_id(user), limit=limit)
