"""
API route handlers.
"""

from .health import HealthHandler
from .appointments import AppointmentsHandler
from .payments import PaymentsHandler
from .users import UsersHandler

__all__ = [
    "HealthHandler",
    "AppointmentsHandler",
    "PaymentsHandler",
    "UsersHandler",
]
