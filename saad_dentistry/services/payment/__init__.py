"""
Booking/payment coordination module.
"""

from .service import PaymentCoordinator

__all__ = [
    "PaymentCoordinator",
]
