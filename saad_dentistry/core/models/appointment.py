"""
Appointment data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..enums import PaymentStatus


class AppointmentCreate(BaseModel):
    """Booking draft submitted by a client.

    Payment fields are not part of the draft; unknown keys such as
    ``payment_status`` or ``amount`` are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    service_id: str
    doctor: str = Field(min_length=1)
    client_email: EmailStr
    client_name: Optional[str] = None
    scheduled_for: Optional[datetime] = None


class Appointment(BaseModel):
    """Stored appointment with its payment state."""

    model_config = ConfigDict(extra="forbid")

    id: str
    service_id: str
    doctor: str
    client_email: str
    client_name: Optional[str] = None
    scheduled_for: Optional[datetime] = None
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    transaction_id: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID
