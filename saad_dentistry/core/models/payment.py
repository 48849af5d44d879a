"""
Payment data models.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..enums import Currency, PaymentRecordStatus


class AuthorizationRequest(BaseModel):
    """Client request for a payment authorization.

    There is no amount field: the price always comes from the
    catalog, and a client-supplied ``amount`` is dropped.
    """

    model_config = ConfigDict(extra="ignore")

    service_id: str
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None


class PaymentConfirmation(BaseModel):
    """Report of a successful charge for an appointment."""

    model_config = ConfigDict(extra="ignore")

    appointment_id: str
    authorization_id: str
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None


class AuthorizationHandle(BaseModel):
    """Opaque gateway handle returned to the client to complete payment."""

    model_config = ConfigDict(extra="forbid")

    authorization_id: str
    client_secret: str
    amount: Decimal
    amount_minor: int
    currency: Currency


class PaymentRecord(BaseModel):
    """Immutable ledger entry for a completed charge."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    appointment_id: str
    service_id: str
    service_title: str
    amount: Decimal
    currency: Currency
    authorization_id: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    status: PaymentRecordStatus = PaymentRecordStatus.SUCCEEDED
    created_at: datetime = Field(description="Time the charge was recorded (UTC)")
