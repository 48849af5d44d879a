"""
Pytest configuration and fixtures.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

from saad_dentistry.config import DatabaseConfig
from saad_dentistry.core.models import AppointmentCreate, AuthorizationHandle, ServiceCreate
from saad_dentistry.services import PaymentCoordinator, PaymentGatewayService, UserService
from saad_dentistry.stores import AppointmentStore, CatalogStore, Database, PaymentLedger, UserStore
from saad_dentistry.utils.money import to_minor_units


async def _fake_authorize(amount, currency, metadata):
    return AuthorizationHandle(
        authorization_id="pi_test_1",
        client_secret="pi_test_1_secret_abc",
        amount=amount,
        amount_minor=to_minor_units(amount, currency),
        currency=currency,
    )


@pytest_asyncio.fixture
async def database(tmp_path):
    """Connected database in a temporary file."""
    db = Database(DatabaseConfig(path=str(tmp_path / "test.db")))
    await db.connect()
    yield db
    await db.close()


@pytest.fixture
def catalog(database):
    return CatalogStore(database)


@pytest.fixture
def appointments(database):
    return AppointmentStore(database)


@pytest.fixture
def ledger(database):
    return PaymentLedger(database)


@pytest.fixture
def user_store(database):
    return UserStore(database)


@pytest.fixture
def mock_authorizer():
    """Mock payment gateway that echoes the amount it was asked for."""
    gateway = Mock(spec=PaymentGatewayService)
    gateway.authorize = AsyncMock(side_effect=_fake_authorize)
    return gateway


@pytest.fixture
def coordinator(database, catalog, appointments, ledger, mock_authorizer):
    return PaymentCoordinator(
        database=database,
        catalog=catalog,
        appointments=appointments,
        ledger=ledger,
        authorizer=mock_authorizer,
    )


@pytest.fixture
def user_service(database, user_store):
    return UserService(database, user_store)


@pytest_asyncio.fixture
async def cleaning_service(catalog):
    """Service S1: teeth cleaning at 120 usd."""
    return await catalog.add_service(
        ServiceCreate(title="Teeth Cleaning", price=Decimal("120"), description="Scale and polish")
    )


@pytest_asyncio.fixture
async def booked_appointment(appointments, cleaning_service):
    """Appointment A1 booked against S1."""
    return await appointments.create(
        AppointmentCreate(
            service_id=cleaning_service.id,
            doctor="Dr. Lalumia",
            client_email="patient@example.com",
            client_name="Test Patient",
        )
    )
