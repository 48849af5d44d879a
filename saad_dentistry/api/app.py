"""
FastAPI application factory and configuration.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings, get_settings
from ..services import PaymentAuthorizer, PaymentCoordinator, PaymentGatewayService, UserService
from ..stores import AppointmentStore, CatalogStore, Database, PaymentLedger, UserStore
from ..utils.logging import configure_logging, get_logger
from .errors import register_error_handlers
from .handlers import AppointmentsHandler, HealthHandler, PaymentsHandler, UsersHandler
from .middleware import LoggingMiddleware, SecurityHeaders

logger = get_logger("saad.app")


def create_app(
    settings: Optional[Settings] = None,
    authorizer: Optional[PaymentAuthorizer] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    The database is opened on startup and closed on shutdown; stores and
    services are built around that one handle and exposed on ``app.state``.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(settings.database_config())
        await database.connect()

        catalog = CatalogStore(database)
        appointments = AppointmentStore(database)
        app.state.database = database
        app.state.catalog = catalog
        app.state.appointments = appointments
        app.state.coordinator = PaymentCoordinator(
            database=database,
            catalog=catalog,
            appointments=appointments,
            ledger=PaymentLedger(database),
            authorizer=authorizer or PaymentGatewayService(settings.payment_gateway_config()),
        )
        app.state.users = UserService(database, UserStore(database))
        logger.info(f"{settings.app_name} started")
        try:
            yield
        finally:
            await database.close()
            logger.info(f"{settings.app_name} stopped")

    app = FastAPI(
        title=settings.app_name,
        description="Appointment booking and payment confirmation for SaaD Dentistry",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    app.include_router(HealthHandler(settings).router, prefix="/health", tags=["health"])
    app.include_router(AppointmentsHandler().router, prefix="/appointments", tags=["appointments"])
    app.include_router(PaymentsHandler().router, prefix="/payments", tags=["payments"])
    app.include_router(UsersHandler().router, prefix="/users", tags=["users"])

    return app
