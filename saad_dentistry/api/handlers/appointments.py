"""
Appointment booking handler.
"""

from typing import List

from fastapi import APIRouter, Request

from ...core.models import Appointment, AppointmentCreate
from ...utils.validation import ValidationUtils


class AppointmentsHandler:
    """Handler for appointment endpoints."""

    def __init__(self):
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):

        @self.router.post("", response_model=Appointment, status_code=201)
        async def create_appointment(draft: AppointmentCreate, request: Request):
            """Book an appointment. It always starts unpaid."""
            ValidationUtils.require_id(draft.service_id, "service_id")
            await request.app.state.catalog.get_service(draft.service_id)
            return await request.app.state.appointments.create(draft)

        @self.router.get("", response_model=List[Appointment])
        async def list_appointments(email: str, request: Request):
            return await request.app.state.appointments.list_for_client(email)

        @self.router.get("/{appointment_id}", response_model=Appointment)
        async def get_appointment(appointment_id: str, request: Request):
            ValidationUtils.require_id(appointment_id, "appointment_id")
            return await request.app.state.appointments.get_by_id(appointment_id)
