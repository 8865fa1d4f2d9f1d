# weighbill/api/routes_attendance.py
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from weighbill.api.deps import current_user
from weighbill.db.session import get_db
from weighbill.schemas.attendance import PunchOut
from weighbill.services import attendance_service
from weighbill.utils.resp import ok

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("/check-in")
def check_in(
        db: Session = Depends(get_db),
        user: Dict[str, Any] = Depends(current_user),
):
    punch = attendance_service.check_in(db, user)
    return ok(PunchOut.model_validate(punch), status_code=201)


@router.post("/check-out")
def check_out(
        db: Session = Depends(get_db),
        user: Dict[str, Any] = Depends(current_user),
):
    punch = attendance_service.check_out(db, user)
    return ok(PunchOut.model_validate(punch))


@router.get("")
def my_attendance(
        limit: int = Query(30, ge=1, le=366),
        db: Session = Depends(get_db),
        user: Dict[str, Any] = Depends(current_user),
):
    rows = [
        PunchOut.model_validate(p)
        for p in attendance_service.list_for_user(db, user, limit=limit)
    ]
    return ok(rows, meta={"count": len(rows)})
