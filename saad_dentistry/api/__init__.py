"""
HTTP adapter for the SaaD Dentistry core.
"""

from .app import create_app

__all__ = [
    "create_app",
]
