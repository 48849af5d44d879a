"""
Configuration management for the SaaD Dentistry core.
"""

from .settings import Settings, get_settings
from .database import DatabaseConfig
from .external_apis import PaymentGatewayConfig

__all__ = [
    "Settings",
    "get_settings",
    "DatabaseConfig",
    "PaymentGatewayConfig",
]
