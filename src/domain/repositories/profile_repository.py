"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile, UserWithProfile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_by_uuid(self, uuid: UUID, for_update: bool = False) -> Profile | None:
        """Get a profile by its public uuid, optionally locking the row."""
        ...

    async def get_with_owner(self, uuid: UUID) -> UserWithProfile | None:
        """Get a profile together with the user that owns it."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist every mutable field of an existing profile."""
        ...
