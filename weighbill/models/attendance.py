# weighbill/models/attendance.py
from __future__ import annotations

from sqlalchemy import Column, Integer, String, UniqueConstraint

from weighbill.db.base import Base


class AttendancePunch(Base):
    __tablename__ = "attendance_punches"
    __table_args__ = (UniqueConstraint("user_id", "date",
                                       name="uq_attendance_user_date"), )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    user_name = Column(String(120), nullable=True)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    check_in = Column(String(8), nullable=False)  # HH:MM
    check_out = Column(String(8), nullable=True)
