"""
External payment gateway module.
"""

from .service import PaymentAuthorizer, PaymentGatewayService

__all__ = [
    "PaymentAuthorizer",
    "PaymentGatewayService",
]
