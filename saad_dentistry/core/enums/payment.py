"""
Payment-related enums.
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """Payment status of an appointment."""

    UNPAID = "unpaid"
    PAID = "paid"


class PaymentRecordStatus(str, Enum):
    """Status of a ledger entry. Only successful charges are recorded."""

    SUCCEEDED = "succeeded"


class Currency(str, Enum):
    """Currency tag carried with prices and charges."""

    USD = "usd"

    @property
    def minor_unit_exponent(self) -> int:
        return 2
