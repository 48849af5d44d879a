"""
Booking/payment coordinator: authorization requests and payment confirmation.
"""

import sqlite3
from datetime import datetime, timezone
from typing import Optional

from ...core.enums import PaymentRecordStatus
from ...core.exceptions import AlreadyPaid, AuthorizationFailed
from ...core.models import (
    AuthorizationHandle,
    AuthorizationRequest,
    PaymentConfirmation,
    PaymentRecord,
)
from ...stores import AppointmentStore, CatalogStore, Database, PaymentLedger
from ...utils.logging import get_logger
from ...utils.validation import ValidationUtils
from ..external import PaymentAuthorizer

logger = get_logger("saad.payments")


class PaymentCoordinator:
    """Owns the invariants between appointments, the catalog and the ledger.

    Amounts are always read from the catalog at the moment of use. A paid
    appointment and its ledger entry are written in one transaction, with
    the conditional status flip first, so an appointment can never be paid
    twice nor be paid without a record.
    """

    def __init__(
        self,
        database: Database,
        catalog: CatalogStore,
        appointments: AppointmentStore,
        ledger: PaymentLedger,
        authorizer: PaymentAuthorizer,
    ):
        self.database = database
        self.catalog = catalog
        self.appointments = appointments
        self.ledger = ledger
        self.authorizer = authorizer

    async def request_authorization(
        self,
        service_id: Optional[str],
        customer_name: Optional[str] = None,
        customer_email: Optional[str] = None,
    ) -> AuthorizationHandle:
        """
        Obtain a payment authorization for a service.

        No local state is touched, so this is safe to retry.

        Raises:
            InvalidRequest: if service_id is missing or malformed
            ServiceNotFound: if the service does not exist
            AuthorizationFailed: if the gateway call fails
        """
        ValidationUtils.require_id(service_id, "service_id")
        service = await self.catalog.get_service(service_id)

        metadata = {
            "service_id": service.id,
            "service_title": service.title,
            "customer_name": customer_name or "",
            "customer_email": customer_email or "",
        }
        try:
            handle = await self.authorizer.authorize(service.price, service.currency, metadata)
        except AuthorizationFailed as e:
            logger.warning(f"payments: authorization failed for service {service.id}: {e}")
            raise

        logger.info(
            f"payments: authorization {handle.authorization_id} issued for "
            f"service {service.id} ({service.price} {service.currency.value})"
        )
        return handle

    async def authorize(self, request: AuthorizationRequest) -> AuthorizationHandle:
        """Model-based entry point for :meth:`request_authorization`."""
        return await self.request_authorization(
            request.service_id,
            customer_name=request.customer_name,
            customer_email=str(request.customer_email) if request.customer_email else None,
        )

    async def confirm_payment(
        self,
        appointment_id: Optional[str],
        authorization_id: Optional[str],
        customer_name: Optional[str] = None,
        customer_email: Optional[str] = None,
    ) -> PaymentRecord:
        """
        Record a successful charge and mark the appointment paid.

        Raises:
            InvalidRequest: if an identifier is missing or malformed
            AppointmentNotFound: if the appointment does not exist
            AlreadyPaid: if the appointment was already paid
            ServiceNotFound: if the booked service has since been removed
        """
        ValidationUtils.require_id(appointment_id, "appointment_id")
        authorization_id = ValidationUtils.require_text(authorization_id, "authorization_id")

        appointment = await self.appointments.get_by_id(appointment_id)
        if appointment.is_paid:
            logger.warning(f"payments: duplicate confirmation for appointment {appointment_id}")
            raise AlreadyPaid(f"Appointment {appointment_id} is already paid")

        service = await self.catalog.get_service(appointment.service_id)

        now = datetime.now(timezone.utc)
        record = PaymentRecord(
            id=ValidationUtils.new_id(),
            appointment_id=appointment.id,
            service_id=service.id,
            service_title=service.title,
            amount=service.price,
            currency=service.currency,
            authorization_id=authorization_id,
            customer_name=customer_name,
            customer_email=customer_email,
            status=PaymentRecordStatus.SUCCEEDED,
            created_at=now,
        )

        def _commit(conn: sqlite3.Connection) -> PaymentRecord:
            # Flip first; the ledger row is only written if this call won.
            self.appointments.mark_paid_in(conn, appointment.id, authorization_id, now)
            return self.ledger.append_in(conn, record)

        try:
            committed = await self.database.transaction(_commit)
        except AlreadyPaid:
            logger.warning(f"payments: lost confirmation race for appointment {appointment_id}")
            raise

        logger.info(
            f"payments: appointment {appointment.id} paid "
            f"({committed.amount} {committed.currency.value}, auth {authorization_id})"
        )
        return committed

    async def confirm(self, confirmation: PaymentConfirmation) -> PaymentRecord:
        """Model-based entry point for :meth:`confirm_payment`."""
        return await self.confirm_payment(
            confirmation.appointment_id,
            confirmation.authorization_id,
            customer_name=confirmation.customer_name,
            customer_email=str(confirmation.customer_email) if confirmation.customer_email else None,
        )
