"""
Appointment-related exceptions.
"""

from .base import ClinicCoreError


class AppointmentNotFound(ClinicCoreError):
    """Appointment does not exist."""

    code = "appointment_not_found"


class AlreadyPaid(ClinicCoreError):
    """Appointment has already been paid."""

    code = "already_paid"
