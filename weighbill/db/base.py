# weighbill/db/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Local auxiliary tables (payment records, attendance punches)."""
    pass
