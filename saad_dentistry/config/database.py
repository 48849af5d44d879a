"""
Database configuration.
"""

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """Database configuration settings."""

    path: str = "saad_dentistry.db"
    timeout: float = 30.0
