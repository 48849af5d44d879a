"""
User-related enums.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles a registered user can hold."""

    USER = "user"
    DOCTOR = "doctor"
    ADMIN = "admin"
