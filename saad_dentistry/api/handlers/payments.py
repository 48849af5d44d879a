"""
Payment authorization and confirmation handler.
"""

from fastapi import APIRouter, Request

from ...core.models import (
    AuthorizationHandle,
    AuthorizationRequest,
    PaymentConfirmation,
    PaymentRecord,
)


class PaymentsHandler:
    """Handler for payment endpoints."""

    def __init__(self):
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):

        @self.router.post("/authorize", response_model=AuthorizationHandle)
        async def authorize(body: AuthorizationRequest, request: Request):
            """Create a payment authorization priced from the catalog."""
            return await request.app.state.coordinator.authorize(body)

        @self.router.post("/confirm", response_model=PaymentRecord, status_code=201)
        async def confirm(body: PaymentConfirmation, request: Request):
            """Record a successful payment and mark the appointment paid."""
            return await request.app.state.coordinator.confirm(body)
