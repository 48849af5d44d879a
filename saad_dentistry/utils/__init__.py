"""
Utility modules for the SaaD Dentistry core.
"""

from .validation import ValidationUtils
from .money import to_minor_units
from .logging import configure_logging, get_logger

__all__ = [
    "ValidationUtils",
    "to_minor_units",
    "configure_logging",
    "get_logger",
]
