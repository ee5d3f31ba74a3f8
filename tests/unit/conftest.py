"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import bcrypt
import pytest

from domain.entities.profile import Profile, UserWithProfile
from domain.entities.user import User
from domain.services.link_builder import LinkBuilder

# Cheap cost factor keeps unit tests fast
SECRET1_HASH = bcrypt.hashpw(b"secret1", bcrypt.gensalt(4)).decode("utf-8")


class FakeUnitOfWork:
    """Fake Unit of Work with user and profile repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def links() -> LinkBuilder:
    return LinkBuilder("https://qr.example.com/")


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def profile_uuid() -> UUID:
    """A random public profile uuid."""
    return uuid4()


@pytest.fixture
def alice(user_id: UUID) -> User:
    return User(id=user_id, username="alice", password_hash=SECRET1_HASH)


@pytest.fixture
def alice_profile(user_id: UUID, profile_uuid: UUID) -> Profile:
    return Profile(user_id=user_id, uuid=profile_uuid)


@pytest.fixture
def alice_owned(alice: User, alice_profile: Profile) -> UserWithProfile:
    return UserWithProfile(user=alice, profile=alice_profile)
