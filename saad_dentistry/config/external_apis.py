"""
External API configuration.
"""

from typing import Optional
from pydantic import BaseModel


class PaymentGatewayConfig(BaseModel):
    """Payment gateway (Stripe payment intents) settings."""

    base_url: str = "https://api.stripe.com"
    secret_key: Optional[str] = None
    timeout: float = 10.0

    def get_payment_intents_url(self) -> str:
        """Get the payment intent creation URL."""
        return f"{self.base_url.rstrip('/')}/v1/payment_intents"

    def is_configured(self) -> bool:
        """Check if the gateway has credentials."""
        return bool(self.secret_key)
