"""Tests for user accounts."""

from uuid import uuid4

import pytest

from tasktrack.core.modules.user.service import check_password, hash_password
from tasktrack.errors import ConflictError, NotFoundError


class TestPasswordHashing:
    def test_hash_verifies(self):
        password_hash = hash_password("secret123")
        assert password_hash != "secret123"
        assert check_password("secret123", password_hash)
        assert not check_password("secret124", password_hash)


class TestUserService:
    async def test_create_user_lowercases_email(self, user_service):
        user = await user_service.create_user("Ada@Example.com", "secret123", "Ada")
        assert user.email == "ada@example.com"
        assert await user_service.get_user(user.id) == user

    async def test_duplicate_email_conflicts(self, user_service):
        await user_service.create_user("ada@example.com", "secret123", "Ada")
        with pytest.raises(ConflictError, match="Email already registered"):
            await user_service.create_user("ADA@example.com", "other123", "Other Ada")

    async def test_unique_index_race_conflicts(self, user_service, monkeypatch):
        await user_service.create_user("ada@example.com", "secret123", "Ada")

        async def not_found(email):
            return None

        # Second writer passed the pre-check before the first insert landed
        monkeypatch.setattr(user_service, "get_user_by_email", not_found)
        with pytest.raises(ConflictError):
            await user_service.create_user("ada@example.com", "secret123", "Ada")

    async def test_get_unknown_user(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.get_user(uuid4())

    async def test_authenticate(self, user_service):
        user = await user_service.create_user("ada@example.com", "secret123", "Ada")
        assert await user_service.authenticate("ADA@example.com", "secret123") == user
        assert await user_service.authenticate("ada@example.com", "wrong-pass") is None
        assert await user_service.authenticate("nobody@example.com", "secret123") is None

    async def test_identity_snapshot(self, user_service):
        user = await user_service.create_user("ada@example.com", "secret123", "Ada")
        identity = user.identity()
        assert identity.user_id == user.id
        assert identity.email == "ada@example.com"
        assert identity.name == "Ada"
