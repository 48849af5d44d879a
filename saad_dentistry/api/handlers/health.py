"""
Health check handler.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...config import Settings


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    database: str
    version: str
    uptime: float


class HealthHandler:
    """Handler for health check endpoints."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.started_at = datetime.now(timezone.utc)
        self.router = APIRouter()
        self._setup_routes()

    def _database_state(self, request: Request) -> str:
        database = getattr(request.app.state, "database", None)
        return "connected" if database is not None and database.is_connected else "disconnected"

    def _setup_routes(self):

        @self.router.get("/", response_model=HealthResponse)
        async def health_check(request: Request):
            """Liveness plus database connection state."""
            return HealthResponse(
                status="healthy",
                database=self._database_state(request),
                version=self.settings.app_version,
                uptime=(datetime.now(timezone.utc) - self.started_at).total_seconds(),
            )

        @self.router.get("/ready")
        async def readiness_check(request: Request):
            """Ready once the database handle is open."""
            ready = self._database_state(request) == "connected"
            return {"status": "ready" if ready else "starting"}
