"""
Enums for the SaaD Dentistry core.
"""

from .payment import PaymentStatus, PaymentRecordStatus, Currency
from .user import UserRole

__all__ = [
    "PaymentStatus",
    "PaymentRecordStatus",
    "Currency",
    "UserRole",
]
