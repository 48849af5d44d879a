"""
User-related exceptions.
"""

from .base import ClinicCoreError


class UserNotFound(ClinicCoreError):
    """User does not exist."""

    code = "user_not_found"


class LastAdminViolation(ClinicCoreError):
    """Role change would remove the last remaining administrator."""

    code = "last_admin_violation"
