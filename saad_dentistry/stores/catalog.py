"""
Catalog store: service lookup by identifier.
"""

import sqlite3
from decimal import Decimal

from ..core.enums import Currency
from ..core.exceptions import ServiceNotFound
from ..core.models import Service, ServiceCreate
from ..utils.validation import ValidationUtils
from .database import Database


def _row_to_service(row: sqlite3.Row) -> Service:
    return Service(
        id=row["id"],
        title=row["title"],
        price=Decimal(row["price"]),
        currency=Currency(row["currency"]),
        description=row["description"],
        deleted=bool(row["deleted"]),
    )


class CatalogStore:
    """Read access to the service catalog.

    ``add_service`` and ``remove_service`` are administrative helpers for
    seeding; the booking/payment flow only ever calls ``get_service``.
    """

    def __init__(self, database: Database):
        self.database = database

    async def get_service(self, service_id: str) -> Service:
        """
        Look up a live service.

        Raises:
            ServiceNotFound: if the id is unknown or the service was removed
        """
        row = await self.database.run(
            lambda conn: conn.execute(
                "SELECT * FROM services WHERE id = ? AND deleted = 0", (service_id,)
            ).fetchone()
        )
        if row is None:
            raise ServiceNotFound(f"Service {service_id} not found")
        return _row_to_service(row)

    async def add_service(self, draft: ServiceCreate) -> Service:
        """Insert a new service."""
        service = Service(id=ValidationUtils.new_id(), **draft.model_dump())

        def _insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                "INSERT INTO services (id, title, price, currency, description, deleted) "
                "VALUES (?, ?, ?, ?, ?, 0)",
                (
                    service.id,
                    service.title,
                    str(service.price),
                    service.currency.value,
                    service.description,
                ),
            )

        await self.database.run(_insert)
        return service

    async def remove_service(self, service_id: str) -> None:
        """Soft-delete a service; existing appointments keep their reference."""

        def _delete(conn: sqlite3.Connection) -> int:
            cur = conn.execute(
                "UPDATE services SET deleted = 1 WHERE id = ? AND deleted = 0",
                (service_id,),
            )
            return cur.rowcount

        if await self.database.run(_delete) == 0:
            raise ServiceNotFound(f"Service {service_id} not found")
