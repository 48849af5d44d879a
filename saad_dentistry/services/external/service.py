"""
Payment gateway service for creating payment authorizations.
"""

from decimal import Decimal
from typing import Any, Dict, Optional, Protocol

import httpx

from ...config import PaymentGatewayConfig
from ...core.enums import Currency
from ...core.exceptions import AuthorizationFailed
from ...core.models import AuthorizationHandle
from ...utils.logging import get_logger
from ...utils.money import to_minor_units

logger = get_logger("saad.gateway")


class PaymentAuthorizer(Protocol):
    """Capability that turns an amount into a client-facing authorization."""

    async def authorize(
        self, amount: Decimal, currency: Currency, metadata: Dict[str, str]
    ) -> AuthorizationHandle:
        ...


class PaymentGatewayService:
    """Stripe payment-intent client."""

    def __init__(
        self,
        config: PaymentGatewayConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.timeout = config.timeout
        self._client = client

    async def _make_request(
        self,
        method: str,
        url: str,
        data: Optional[Dict] = None,
        headers: Optional[Dict] = None,
    ) -> Dict[str, Any]:
        """Make HTTP request with error handling."""
        try:
            if self._client is not None:
                response = await self._client.request(
                    method=method, url=url, data=data, headers=headers or {}
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.request(
                        method=method, url=url, data=data, headers=headers or {}
                    )
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException:
            raise AuthorizationFailed("Payment gateway timed out")
        except httpx.HTTPStatusError as e:
            raise AuthorizationFailed(f"Payment gateway HTTP error {e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            raise AuthorizationFailed(f"Payment gateway request failed: {e}")

    async def authorize(
        self, amount: Decimal, currency: Currency, metadata: Dict[str, str]
    ) -> AuthorizationHandle:
        """
        Create a payment intent for ``amount``.

        Args:
            amount: Decimal amount in major units (e.g. 120.00)
            currency: Currency tag
            metadata: Flat string metadata stored on the intent

        Returns:
            AuthorizationHandle carrying the intent id and client secret
        """
        if not self.config.is_configured():
            raise AuthorizationFailed("Payment gateway is not configured")

        amount_minor = to_minor_units(amount, currency)
        data: Dict[str, Any] = {
            "amount": amount_minor,
            "currency": currency.value,
            "payment_method_types[]": "card",
        }
        for key, value in metadata.items():
            if value is not None:
                data[f"metadata[{key}]"] = value

        headers = {"Authorization": f"Bearer {self.config.secret_key}"}
        result = await self._make_request(
            "POST", self.config.get_payment_intents_url(), data=data, headers=headers
        )

        intent_id = result.get("id")
        client_secret = result.get("client_secret")
        if not intent_id or not client_secret:
            logger.error(f"gateway: malformed payment intent response: {sorted(result)}")
            raise AuthorizationFailed("Payment gateway returned a malformed response")

        logger.info(f"gateway: created intent {intent_id} for {amount_minor} {currency.value}")
        return AuthorizationHandle(
            authorization_id=intent_id,
            client_secret=client_secret,
            amount=amount,
            amount_minor=amount_minor,
            currency=currency,
        )
