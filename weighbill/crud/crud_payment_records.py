# weighbill/crud/crud_payment_records.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from weighbill.models.payment_record import PaymentRecord
from weighbill.utils.timezone import utcnow


class SqlPaymentRecordStore:
    """PaymentRecordStore backed by the local SQL database."""

    def __init__(self, db: Session):
        self.db = db

    def append(self, bill_id: str, amount: Decimal,
               date: Optional[datetime] = None) -> PaymentRecord:
        row = PaymentRecord(
            bill_id=str(bill_id),
            amount=amount,
            date=date or utcnow(),
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def list_for_bill(self, bill_id: str) -> List[PaymentRecord]:
        stmt = (select(PaymentRecord).where(
            PaymentRecord.bill_id == str(bill_id)).order_by(
                PaymentRecord.date.asc(), PaymentRecord.id.asc()))
        return list(self.db.scalars(stmt))

    def list_for_bills(self, bill_ids: Iterable[str]) -> List[PaymentRecord]:
        ids = sorted({str(b) for b in bill_ids})
        if not ids:
            return []
        stmt = (select(PaymentRecord).where(
            PaymentRecord.bill_id.in_(ids)).order_by(PaymentRecord.id.asc()))
        return list(self.db.scalars(stmt))

    def list_all(self) -> List[PaymentRecord]:
        stmt = select(PaymentRecord).order_by(PaymentRecord.id.asc())
        return list(self.db.scalars(stmt))
