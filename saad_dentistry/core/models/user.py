"""
User-related data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr

from ..enums import UserRole


class UserLogin(BaseModel):
    """Profile fields sent on sign-in. Role is never accepted here."""

    model_config = ConfigDict(extra="ignore")

    email: EmailStr
    name: Optional[str] = None
    photo_url: Optional[str] = None


class RoleChange(BaseModel):
    """Role mutation request."""

    model_config = ConfigDict(extra="forbid")

    role: UserRole


class User(BaseModel):
    """Registered user."""

    model_config = ConfigDict(extra="forbid")

    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: UserRole = UserRole.USER
    created_at: datetime
    last_login_at: datetime
