# weighbill/models/__init__.py
from .attendance import AttendancePunch
from .payment_record import PaymentRecord

__all__ = [
    "AttendancePunch",
    "PaymentRecord",
]
