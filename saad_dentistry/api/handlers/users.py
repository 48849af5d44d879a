"""
User handler: sign-in bookkeeping and role changes.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...core.models import RoleChange, User, UserLogin


class LoginResponse(BaseModel):
    """Result of a sign-in."""
    success: bool
    type: str
    user: User


class UsersHandler:
    """Handler for user endpoints."""

    def __init__(self):
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):

        @self.router.post("", response_model=LoginResponse)
        async def login(body: UserLogin, request: Request):
            """Register on first sign-in, otherwise record the login."""
            user, created = await request.app.state.users.register_or_login(body)
            return LoginResponse(
                success=True, type="register" if created else "login", user=user
            )

        @self.router.get("/{email}", response_model=User)
        async def get_user(email: str, request: Request):
            return await request.app.state.users.get_user(email)

        @self.router.patch("/{email}/role", response_model=User)
        async def change_role(email: str, body: RoleChange, request: Request):
            return await request.app.state.users.change_role(email, body)
