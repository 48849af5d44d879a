"""
Payment ledger: append-only record of completed charges.
"""

import sqlite3
from decimal import Decimal
from typing import Optional

from ..core.enums import Currency, PaymentRecordStatus
from ..core.exceptions import AlreadyPaid
from ..core.models import PaymentRecord
from .database import Database


def _row_to_record(row: sqlite3.Row) -> PaymentRecord:
    return PaymentRecord(
        id=row["id"],
        appointment_id=row["appointment_id"],
        service_id=row["service_id"],
        service_title=row["service_title"],
        amount=Decimal(row["amount"]),
        currency=Currency(row["currency"]),
        authorization_id=row["authorization_id"],
        customer_name=row["customer_name"],
        customer_email=row["customer_email"],
        status=PaymentRecordStatus(row["status"]),
        created_at=row["created_at"],
    )


class PaymentLedger:
    """Append-only payment records. There is no update or delete."""

    def __init__(self, database: Database):
        self.database = database

    async def append(self, record: PaymentRecord) -> PaymentRecord:
        """Append a record in its own transaction."""
        return await self.database.transaction(lambda conn: self.append_in(conn, record))

    def append_in(self, conn: sqlite3.Connection, record: PaymentRecord) -> PaymentRecord:
        """
        Insert a record on an open connection.

        Raises:
            AlreadyPaid: if the appointment already has a record
        """
        try:
            conn.execute(
                """
                INSERT INTO payments (
                    id, appointment_id, service_id, service_title, amount,
                    currency, authorization_id, customer_name, customer_email,
                    status, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.appointment_id,
                    record.service_id,
                    record.service_title,
                    str(record.amount),
                    record.currency.value,
                    record.authorization_id,
                    record.customer_name,
                    record.customer_email,
                    record.status.value,
                    record.created_at.isoformat(),
                ),
            )
        except sqlite3.IntegrityError as e:
            raise AlreadyPaid(
                f"Appointment {record.appointment_id} already has a payment record"
            ) from e
        return record

    async def get_for_appointment(self, appointment_id: str) -> Optional[PaymentRecord]:
        """Fetch the record for an appointment, if any."""
        row = await self.database.run(
            lambda conn: conn.execute(
                "SELECT * FROM payments WHERE appointment_id = ?", (appointment_id,)
            ).fetchone()
        )
        return _row_to_record(row) if row is not None else None

    async def count_for_appointment(self, appointment_id: str) -> int:
        """Count records for an appointment (0 or 1)."""
        row = await self.database.run(
            lambda conn: conn.execute(
                "SELECT COUNT(*) FROM payments WHERE appointment_id = ?", (appointment_id,)
            ).fetchone()
        )
        return int(row[0])
