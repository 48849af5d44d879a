"""
Custom exceptions for the SaaD Dentistry core.
"""

from .base import ClinicCoreError, InvalidRequest, StorageError
from .booking import AppointmentNotFound, AlreadyPaid
from .catalog import ServiceNotFound
from .payment import AuthorizationFailed
from .user import UserNotFound, LastAdminViolation

__all__ = [
    "ClinicCoreError",
    "InvalidRequest",
    "StorageError",
    "AppointmentNotFound",
    "AlreadyPaid",
    "ServiceNotFound",
    "AuthorizationFailed",
    "UserNotFound",
    "LastAdminViolation",
]
