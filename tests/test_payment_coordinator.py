"""
Tests for the booking/payment coordinator.
"""

import asyncio
import sqlite3
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from saad_dentistry.core.enums import Currency, PaymentRecordStatus, PaymentStatus
from saad_dentistry.core.exceptions import (
    AlreadyPaid,
    AppointmentNotFound,
    AuthorizationFailed,
    InvalidRequest,
    ServiceNotFound,
    StorageError,
)
from saad_dentistry.core.models import AuthorizationRequest, PaymentConfirmation, PaymentRecord
from saad_dentistry.utils.validation import ValidationUtils


class TestRequestAuthorization:
    """Test authorization requests."""

    @pytest.mark.asyncio
    async def test_amount_comes_from_catalog(self, coordinator, mock_authorizer, cleaning_service):
        handle = await coordinator.request_authorization(
            cleaning_service.id, "Test Patient", "patient@example.com"
        )

        mock_authorizer.authorize.assert_awaited_once()
        amount, currency, metadata = mock_authorizer.authorize.await_args.args
        assert amount == Decimal("120")
        assert currency == Currency.USD
        assert metadata == {
            "service_id": cleaning_service.id,
            "service_title": "Teeth Cleaning",
            "customer_name": "Test Patient",
            "customer_email": "patient@example.com",
        }
        assert handle.amount_minor == 12000
        assert handle.authorization_id == "pi_test_1"

    @pytest.mark.asyncio
    async def test_client_amount_is_ignored(self, coordinator, mock_authorizer, cleaning_service):
        request = AuthorizationRequest.model_validate(
            {"service_id": cleaning_service.id, "amount": "0.50"}
        )
        handle = await coordinator.authorize(request)
        assert handle.amount == Decimal("120")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("service_id", [None, "", "not-an-id"])
    async def test_malformed_service_id(self, coordinator, mock_authorizer, service_id):
        with pytest.raises(InvalidRequest):
            await coordinator.request_authorization(service_id)
        mock_authorizer.authorize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_service(self, coordinator, mock_authorizer):
        with pytest.raises(ServiceNotFound):
            await coordinator.request_authorization(ValidationUtils.new_id())
        mock_authorizer.authorize.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_gateway_failure_propagates(
        self, coordinator, mock_authorizer, cleaning_service, booked_appointment, appointments
    ):
        mock_authorizer.authorize = AsyncMock(side_effect=AuthorizationFailed("gateway down"))
        with pytest.raises(AuthorizationFailed):
            await coordinator.request_authorization(cleaning_service.id)

        stored = await appointments.get_by_id(booked_appointment.id)
        assert stored.payment_status == PaymentStatus.UNPAID

    @pytest.mark.asyncio
    async def test_repeated_authorizations_allowed(self, coordinator, mock_authorizer, cleaning_service):
        await coordinator.request_authorization(cleaning_service.id)
        await coordinator.request_authorization(cleaning_service.id)
        assert mock_authorizer.authorize.await_count == 2


class TestConfirmPayment:
    """Test payment confirmation."""

    @pytest.mark.asyncio
    async def test_confirm_marks_paid_and_records(
        self, coordinator, appointments, ledger, booked_appointment, cleaning_service
    ):
        record = await coordinator.confirm_payment(
            booked_appointment.id, "tok_1", "Test Patient", "patient@example.com"
        )

        assert record.amount == Decimal("120")
        assert record.currency == Currency.USD
        assert record.service_id == cleaning_service.id
        assert record.service_title == "Teeth Cleaning"
        assert record.authorization_id == "tok_1"
        assert record.status == PaymentRecordStatus.SUCCEEDED

        stored = await appointments.get_by_id(booked_appointment.id)
        assert stored.payment_status == PaymentStatus.PAID
        assert stored.transaction_id == "tok_1"
        assert stored.paid_at == record.created_at
        assert await ledger.get_for_appointment(booked_appointment.id) == record

    @pytest.mark.asyncio
    async def test_second_confirmation_rejected(self, coordinator, ledger, booked_appointment):
        await coordinator.confirm_payment(booked_appointment.id, "tok_1")
        with pytest.raises(AlreadyPaid):
            await coordinator.confirm_payment(booked_appointment.id, "tok_2")

        assert await ledger.count_for_appointment(booked_appointment.id) == 1
        record = await ledger.get_for_appointment(booked_appointment.id)
        assert record.authorization_id == "tok_1"

    @pytest.mark.asyncio
    async def test_concurrent_confirmations(self, coordinator, ledger, appointments, booked_appointment):
        results = await asyncio.gather(
            coordinator.confirm_payment(booked_appointment.id, "tok_1"),
            coordinator.confirm_payment(booked_appointment.id, "tok_2"),
            return_exceptions=True,
        )

        successes = [r for r in results if isinstance(r, PaymentRecord)]
        rejections = [r for r in results if isinstance(r, AlreadyPaid)]
        assert len(successes) == 1
        assert len(rejections) == 1
        assert await ledger.count_for_appointment(booked_appointment.id) == 1

        stored = await appointments.get_by_id(booked_appointment.id)
        assert stored.transaction_id == successes[0].authorization_id

    @pytest.mark.asyncio
    async def test_stale_read_loses_at_conditional_update(
        self, coordinator, ledger, appointments, booked_appointment
    ):
        stale = await appointments.get_by_id(booked_appointment.id)
        await coordinator.confirm_payment(booked_appointment.id, "tok_1")

        # Second caller read the appointment before the first one committed.
        coordinator.appointments.get_by_id = AsyncMock(return_value=stale)
        with pytest.raises(AlreadyPaid):
            await coordinator.confirm_payment(booked_appointment.id, "tok_2")

        assert await ledger.count_for_appointment(booked_appointment.id) == 1

    @pytest.mark.asyncio
    async def test_client_amount_is_ignored(self, coordinator, booked_appointment):
        confirmation = PaymentConfirmation.model_validate({
            "appointment_id": booked_appointment.id,
            "authorization_id": "tok_1",
            "amount": "1.00",
        })
        record = await coordinator.confirm(confirmation)
        assert record.amount == Decimal("120")

    @pytest.mark.asyncio
    async def test_unknown_appointment(self, coordinator, ledger):
        missing = ValidationUtils.new_id()
        with pytest.raises(AppointmentNotFound):
            await coordinator.confirm_payment(missing, "tok_1")
        assert await ledger.count_for_appointment(missing) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("appointment_id", [None, "", "1234", "g" * 24])
    async def test_malformed_appointment_id(self, coordinator, appointment_id):
        with pytest.raises(InvalidRequest):
            await coordinator.confirm_payment(appointment_id, "tok_1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("authorization_id", [None, "", "   "])
    async def test_missing_authorization_id(self, coordinator, booked_appointment, authorization_id):
        with pytest.raises(InvalidRequest):
            await coordinator.confirm_payment(booked_appointment.id, authorization_id)

    @pytest.mark.asyncio
    async def test_service_removed_after_booking(
        self, coordinator, catalog, appointments, ledger, booked_appointment, cleaning_service
    ):
        await catalog.remove_service(cleaning_service.id)

        with pytest.raises(ServiceNotFound):
            await coordinator.confirm_payment(booked_appointment.id, "tok_1")

        stored = await appointments.get_by_id(booked_appointment.id)
        assert stored.payment_status == PaymentStatus.UNPAID
        assert await ledger.count_for_appointment(booked_appointment.id) == 0

    @pytest.mark.asyncio
    async def test_ledger_failure_leaves_appointment_unpaid(
        self, coordinator, appointments, ledger, booked_appointment
    ):
        def _broken_append(conn, record):
            raise sqlite3.OperationalError("disk I/O error")

        coordinator.ledger.append_in = _broken_append
        with pytest.raises(StorageError):
            await coordinator.confirm_payment(booked_appointment.id, "tok_1")

        stored = await appointments.get_by_id(booked_appointment.id)
        assert stored.payment_status == PaymentStatus.UNPAID

    @pytest.mark.asyncio
    async def test_price_change_applies_at_confirmation(
        self, coordinator, database, booked_appointment, cleaning_service
    ):
        await database.run(
            lambda conn: conn.execute(
                "UPDATE services SET price = ? WHERE id = ?", ("135.50", cleaning_service.id)
            )
        )
        record = await coordinator.confirm_payment(booked_appointment.id, "tok_1")
        assert record.amount == Decimal("135.50")
