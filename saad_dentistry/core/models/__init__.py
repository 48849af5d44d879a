"""
Core data models for the SaaD Dentistry core.
"""

from .catalog import Service, ServiceCreate
from .appointment import Appointment, AppointmentCreate
from .payment import (
    AuthorizationHandle,
    AuthorizationRequest,
    PaymentConfirmation,
    PaymentRecord,
)
from .user import User, UserLogin, RoleChange

__all__ = [
    "Service",
    "ServiceCreate",
    "Appointment",
    "AppointmentCreate",
    "AuthorizationHandle",
    "AuthorizationRequest",
    "PaymentConfirmation",
    "PaymentRecord",
    "User",
    "UserLogin",
    "RoleChange",
]
