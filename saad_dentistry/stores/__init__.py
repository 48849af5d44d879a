"""
SQLite-backed stores for the SaaD Dentistry core.
"""

from .database import Database
from .catalog import CatalogStore
from .appointments import AppointmentStore
from .ledger import PaymentLedger
from .users import UserStore

__all__ = [
    "Database",
    "CatalogStore",
    "AppointmentStore",
    "PaymentLedger",
    "UserStore",
]
