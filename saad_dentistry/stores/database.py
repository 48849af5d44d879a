"""
Database handle with an explicit connect/close lifecycle.
"""

import asyncio
import sqlite3
from typing import Callable, Optional, TypeVar

from ..config import DatabaseConfig
from ..core.exceptions import ClinicCoreError, StorageError
from ..utils.logging import get_logger

logger = get_logger("saad.db")

T = TypeVar("T")

SCHEMA = """
CREATE TABLE IF NOT EXISTS services (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    price TEXT NOT NULL,
    currency TEXT NOT NULL,
    description TEXT,
    deleted INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS appointments (
    id TEXT PRIMARY KEY,
    service_id TEXT NOT NULL,
    doctor TEXT NOT NULL,
    client_email TEXT NOT NULL,
    client_name TEXT,
    scheduled_for TEXT,
    payment_status TEXT NOT NULL DEFAULT 'unpaid',
    transaction_id TEXT,
    paid_at TEXT,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_appointments_client
    ON appointments (client_email);

CREATE TABLE IF NOT EXISTS payments (
    id TEXT PRIMARY KEY,
    appointment_id TEXT NOT NULL UNIQUE,
    service_id TEXT NOT NULL,
    service_title TEXT NOT NULL,
    amount TEXT NOT NULL,
    currency TEXT NOT NULL,
    authorization_id TEXT NOT NULL,
    customer_name TEXT,
    customer_email TEXT,
    status TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS users (
    email TEXT PRIMARY KEY,
    name TEXT,
    photo_url TEXT,
    role TEXT NOT NULL DEFAULT 'user',
    created_at TEXT NOT NULL,
    last_login_at TEXT NOT NULL
);
"""


class Database:
    """Owns the SQLite connection shared by every store.

    Work is handed to a worker thread with :func:`asyncio.to_thread` and
    serialized through an :class:`asyncio.Lock`, so one request's statements
    never interleave with another's.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    async def connect(self) -> None:
        """Open the connection and create the schema."""
        if self._conn is not None:
            return

        def _open() -> sqlite3.Connection:
            conn = sqlite3.connect(
                self.config.path,
                timeout=self.config.timeout,
                isolation_level=None,
                check_same_thread=False,
            )
            conn.row_factory = sqlite3.Row
            conn.executescript(SCHEMA)
            return conn

        self._conn = await asyncio.to_thread(_open)
        logger.info(f"db: connected to {self.config.path}")

    async def close(self) -> None:
        """Close the connection once in-flight work has finished."""
        if self._conn is None:
            return
        async with self._lock:
            conn, self._conn = self._conn, None
            await self._in_worker(conn.close)
        logger.info("db: connection closed")

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("Database is not connected")
        return self._conn

    @staticmethod
    async def _in_worker(fn: Callable[..., T], *args) -> T:
        """
        Run ``fn(*args)`` in a worker thread and wait for it to finish.

        Must be called with the lock held. Cancelling the caller does not
        stop the thread, so the wait continues until the thread is done
        and the connection is free before the cancellation propagates.
        """
        task = asyncio.ensure_future(asyncio.to_thread(fn, *args))
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            while not task.done():
                try:
                    await asyncio.wait({task})
                except asyncio.CancelledError:
                    pass
            if not task.cancelled() and task.exception() is not None:
                logger.warning(f"db: cancelled operation failed: {task.exception()}")
            raise

    async def run(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        """Run ``fn(conn)`` in autocommit mode."""
        conn = self._require_conn()
        async with self._lock:
            try:
                return await self._in_worker(fn, conn)
            except sqlite3.Error as e:
                logger.error(f"db: statement failed: {e}")
                raise StorageError(f"Storage failure: {e}") from e

    async def transaction(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        """
        Run ``fn(conn)`` inside a single write transaction.

        The transaction is committed when ``fn`` returns and rolled back
        when it raises; domain errors propagate unchanged.
        """
        conn = self._require_conn()

        def _tx() -> T:
            conn.execute("BEGIN IMMEDIATE")
            try:
                result = fn(conn)
            except BaseException:
                # SQLite may already have rolled back on its own (e.g. disk full).
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
            return result

        async with self._lock:
            try:
                return await self._in_worker(_tx)
            except ClinicCoreError:
                raise
            except sqlite3.Error as e:
                logger.error(f"db: transaction failed: {e}")
                raise StorageError(f"Storage failure: {e}") from e
