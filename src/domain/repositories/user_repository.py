"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile, UserWithProfile
from domain.entities.user import User


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        ...

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by exact (case-sensitive) username."""
        ...

    async def get_for_update(self, id: UUID) -> User | None:
        """Get a user by ID, locking the row until the transaction ends."""
        ...

    async def list_with_profiles(self) -> list[UserWithProfile]:
        """Get every user with its profile, oldest first."""
        ...

    async def create_with_profile(self, user: User, profile: Profile) -> UserWithProfile:
        """Insert a user and its profile in the current transaction."""
        ...

    async def set_active(self, id: UUID, is_active: bool) -> User | None:
        """Set the active flag and return the updated user."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a user (cascading to its profile) and return success status."""
        ...
