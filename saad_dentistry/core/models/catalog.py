"""
Catalog data models.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from ..enums import Currency


class ServiceCreate(BaseModel):
    """Fields accepted when seeding a service into the catalog."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    price: Decimal = Field(gt=0, decimal_places=2)
    currency: Currency = Currency.USD
    description: Optional[str] = None


class Service(BaseModel):
    """Clinic service as stored in the catalog."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    title: str
    price: Decimal
    currency: Currency = Currency.USD
    description: Optional[str] = None
    deleted: bool = False
