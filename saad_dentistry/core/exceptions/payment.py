"""
Payment gateway exceptions.
"""

from .base import ClinicCoreError


class AuthorizationFailed(ClinicCoreError):
    """Payment gateway could not create an authorization."""

    code = "authorization_failed"
