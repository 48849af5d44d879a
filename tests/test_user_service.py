"""
Tests for user registration and the last-admin guard.
"""

import pytest

from saad_dentistry.core.enums import UserRole
from saad_dentistry.core.exceptions import LastAdminViolation, UserNotFound
from saad_dentistry.core.models import RoleChange, UserLogin


async def _register(user_service, email, role=UserRole.USER):
    user, _ = await user_service.register_or_login(UserLogin(email=email, name=email.split("@")[0]))
    if role != UserRole.USER:
        user = await user_service.change_role(email, RoleChange(role=role))
    return user


class TestRegisterOrLogin:
    """Test sign-in bookkeeping."""

    @pytest.mark.asyncio
    async def test_first_sign_in_registers(self, user_service):
        user, created = await user_service.register_or_login(
            UserLogin(email="new@example.com", name="New", photo_url="https://img/1.png")
        )
        assert created is True
        assert user.role == UserRole.USER
        assert user.photo_url == "https://img/1.png"

    @pytest.mark.asyncio
    async def test_second_sign_in_updates_profile(self, user_service):
        first, _ = await user_service.register_or_login(UserLogin(email="a@example.com", name="Old"))
        second, created = await user_service.register_or_login(
            UserLogin(email="a@example.com", name="New")
        )
        assert created is False
        assert second.name == "New"
        assert second.created_at == first.created_at
        assert second.last_login_at >= first.last_login_at

    @pytest.mark.asyncio
    async def test_login_keeps_role(self, user_service):
        await _register(user_service, "admin@example.com", UserRole.ADMIN)
        user, _ = await user_service.register_or_login(UserLogin(email="admin@example.com"))
        assert user.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_get_unknown_user(self, user_service):
        with pytest.raises(UserNotFound):
            await user_service.get_user("ghost@example.com")


class TestChangeRole:
    """Test the last-admin guard."""

    @pytest.mark.asyncio
    async def test_sole_admin_cannot_be_demoted(self, user_service):
        await _register(user_service, "admin@example.com", UserRole.ADMIN)

        with pytest.raises(LastAdminViolation):
            await user_service.change_role("admin@example.com", RoleChange(role=UserRole.USER))

        user = await user_service.get_user("admin@example.com")
        assert user.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_demotion_allowed_with_two_admins(self, user_service, user_store):
        await _register(user_service, "one@example.com", UserRole.ADMIN)
        await _register(user_service, "two@example.com", UserRole.ADMIN)

        user = await user_service.change_role("one@example.com", RoleChange(role=UserRole.DOCTOR))
        assert user.role == UserRole.DOCTOR
        assert await user_store.count_admins() == 1

        with pytest.raises(LastAdminViolation):
            await user_service.change_role("two@example.com", RoleChange(role=UserRole.USER))

    @pytest.mark.asyncio
    async def test_admin_to_admin_is_allowed(self, user_service):
        await _register(user_service, "admin@example.com", UserRole.ADMIN)
        user = await user_service.change_role("admin@example.com", RoleChange(role=UserRole.ADMIN))
        assert user.role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_non_admin_changes_unaffected(self, user_service):
        await _register(user_service, "admin@example.com", UserRole.ADMIN)
        await _register(user_service, "doc@example.com")
        user = await user_service.change_role("doc@example.com", RoleChange(role=UserRole.DOCTOR))
        assert user.role == UserRole.DOCTOR

    @pytest.mark.asyncio
    async def test_unknown_user(self, user_service):
        with pytest.raises(UserNotFound):
            await user_service.change_role("ghost@example.com", RoleChange(role=UserRole.ADMIN))
