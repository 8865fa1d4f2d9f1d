# weighbill/models/payment_record.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, Numeric, String

from weighbill.db.base import Base
from weighbill.utils.timezone import utcnow


class PaymentRecord(Base):
    """
    Payment received against a bill after it was saved.
    Append-only: rows are never updated or merged.
    """
    __tablename__ = "payment_records"
    __table_args__ = (Index("ix_payment_records_bill", "bill_id"), )

    id = Column(Integer, primary_key=True, index=True)
    bill_id = Column(String(64), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(DateTime, nullable=False, default=utcnow)
