# weighbill/crud/crud_attendance.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from weighbill.models.attendance import AttendancePunch


def get_punch(db: Session, *, user_id: str, on_date: str) -> Optional[AttendancePunch]:
    stmt = (select(AttendancePunch).where(
        AttendancePunch.user_id == str(user_id)).where(
            AttendancePunch.date == on_date))
    return db.scalar(stmt)


def create_punch(db: Session, *, user_id: str, user_name: Optional[str],
                 on_date: str, check_in: str) -> AttendancePunch:
    row = AttendancePunch(
        user_id=str(user_id),
        user_name=user_name,
        date=on_date,
        check_in=check_in,
        check_out=None,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def close_punch(db: Session, punch: AttendancePunch, *, check_out: str) -> AttendancePunch:
    punch.check_out = check_out
    db.commit()
    db.refresh(punch)
    return punch


def list_punches(db: Session, *, user_id: str, limit: int = 30) -> List[AttendancePunch]:
    stmt = (select(AttendancePunch).where(
        AttendancePunch.user_id == str(user_id)).order_by(
            AttendancePunch.date.desc(),
            AttendancePunch.id.desc()).limit(int(limit)))
    return list(db.scalars(stmt))
