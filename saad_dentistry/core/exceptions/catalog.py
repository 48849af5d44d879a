"""
Catalog-related exceptions.
"""

from .base import ClinicCoreError


class ServiceNotFound(ClinicCoreError):
    """Service does not exist or has been removed."""

    code = "service_not_found"
