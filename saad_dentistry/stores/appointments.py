"""
Appointment store: booking records and their payment status.
"""

import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from ..core.enums import PaymentStatus
from ..core.exceptions import AlreadyPaid, AppointmentNotFound
from ..core.models import Appointment, AppointmentCreate
from ..utils.validation import ValidationUtils
from .database import Database


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _row_to_appointment(row: sqlite3.Row) -> Appointment:
    return Appointment(
        id=row["id"],
        service_id=row["service_id"],
        doctor=row["doctor"],
        client_email=row["client_email"],
        client_name=row["client_name"],
        scheduled_for=row["scheduled_for"],
        payment_status=PaymentStatus(row["payment_status"]),
        transaction_id=row["transaction_id"],
        paid_at=row["paid_at"],
        created_at=row["created_at"],
    )


class AppointmentStore:
    """Persistence for appointments."""

    def __init__(self, database: Database):
        self.database = database

    async def create(self, draft: AppointmentCreate) -> Appointment:
        """Persist a new appointment. Payment status is always ``unpaid``."""
        appointment = Appointment(
            id=ValidationUtils.new_id(),
            service_id=draft.service_id,
            doctor=draft.doctor,
            client_email=str(draft.client_email),
            client_name=draft.client_name,
            scheduled_for=draft.scheduled_for,
            payment_status=PaymentStatus.UNPAID,
            created_at=datetime.now(timezone.utc),
        )

        def _insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                """
                INSERT INTO appointments (
                    id, service_id, doctor, client_email, client_name,
                    scheduled_for, payment_status, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    appointment.id,
                    appointment.service_id,
                    appointment.doctor,
                    appointment.client_email,
                    appointment.client_name,
                    _iso(appointment.scheduled_for),
                    appointment.payment_status.value,
                    _iso(appointment.created_at),
                ),
            )

        await self.database.run(_insert)
        return appointment

    async def get_by_id(self, appointment_id: str) -> Appointment:
        """
        Fetch an appointment.

        Raises:
            AppointmentNotFound: if no appointment has this id
        """
        row = await self.database.run(
            lambda conn: self.fetch_row(conn, appointment_id)
        )
        if row is None:
            raise AppointmentNotFound(f"Appointment {appointment_id} not found")
        return _row_to_appointment(row)

    async def list_for_client(self, client_email: str) -> List[Appointment]:
        """List a client's appointments, newest first."""
        rows = await self.database.run(
            lambda conn: conn.execute(
                "SELECT * FROM appointments WHERE client_email = ? "
                "ORDER BY created_at DESC",
                (client_email,),
            ).fetchall()
        )
        return [_row_to_appointment(row) for row in rows]

    async def mark_paid(
        self, appointment_id: str, transaction_id: str, paid_at: datetime
    ) -> Appointment:
        """Flip an unpaid appointment to paid in its own transaction."""
        return await self.database.transaction(
            lambda conn: self.mark_paid_in(conn, appointment_id, transaction_id, paid_at)
        )

    @staticmethod
    def fetch_row(conn: sqlite3.Connection, appointment_id: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            "SELECT * FROM appointments WHERE id = ?", (appointment_id,)
        ).fetchone()

    def mark_paid_in(
        self,
        conn: sqlite3.Connection,
        appointment_id: str,
        transaction_id: str,
        paid_at: datetime,
    ) -> Appointment:
        """
        Conditional unpaid -> paid update on an open connection.

        The status check and the write are one statement, so a concurrent
        confirmation can never overwrite an earlier one.

        Raises:
            AppointmentNotFound: if no appointment has this id
            AlreadyPaid: if the appointment is already paid
        """
        cur = conn.execute(
            """
            UPDATE appointments
               SET payment_status = ?, transaction_id = ?, paid_at = ?
             WHERE id = ? AND payment_status = ?
            """,
            (
                PaymentStatus.PAID.value,
                transaction_id,
                _iso(paid_at),
                appointment_id,
                PaymentStatus.UNPAID.value,
            ),
        )
        row = self.fetch_row(conn, appointment_id)
        if row is None:
            raise AppointmentNotFound(f"Appointment {appointment_id} not found")
        if cur.rowcount == 0:
            raise AlreadyPaid(f"Appointment {appointment_id} is already paid")
        return _row_to_appointment(row)
