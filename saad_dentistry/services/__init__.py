"""
Service layer for the SaaD Dentistry core.
"""

from .payment import PaymentCoordinator
from .users import UserService
from .external import PaymentAuthorizer, PaymentGatewayService

__all__ = [
    "PaymentCoordinator",
    "UserService",
    "PaymentAuthorizer",
    "PaymentGatewayService",
]
