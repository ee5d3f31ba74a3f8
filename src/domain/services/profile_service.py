"""Profile service layer: user + profile records and their mutation rules."""

import asyncio
from collections.abc import Callable, Mapping
from typing import Any, Optional
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AuthenticationError,
    DuplicateUsernameError,
    ProfileNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.profile import (
    OWNER_EDITABLE_FIELDS,
    Profile,
    ProfilePatch,
    UserWithProfile,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.credential_service import CredentialService
from domain.services.locks import KeyedLocks
from infrastructure.auth.password import hash_password

logger = structlog.get_logger()

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class ProfileService:
    """Service layer for User/Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        credential_service: Optional[CredentialService] = None,
        locks: Optional[KeyedLocks] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._credentials = credential_service or CredentialService(uow_factory)
        self._locks = locks or KeyedLocks()

    async def create_user_with_profile(
        self,
        username: str,
        password: str,
        email: str | None = None,
    ) -> UserWithProfile:
        """Create a user and its (unpublished) profile in one transaction."""
        if not username or not username.strip():
            raise ValidationError("Username is required", details={"field": "username"})
        if not password or not password.strip():
            raise ValidationError("Password is required", details={"field": "password"})
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
                details={"field": "password"},
            )

        password_hash = await asyncio.to_thread(hash_password, password)

        async with self._uow_factory() as uow:
            if await uow.users.get_by_username(username):
                raise DuplicateUsernameError(username)

            user = User(username=username, password_hash=password_hash, email=email or None)
            profile = Profile(user_id=user.id)
            try:
                created = await uow.users.create_with_profile(user, profile)
                await uow.commit()
            except IntegrityError:
                # Lost a race with a concurrent create of the same username
                await uow.rollback()
                raise DuplicateUsernameError(username) from None

        logger.info("user_created", user_id=str(created.user.id), uuid=str(created.profile.uuid))
        return created

    async def get_profile(self, uuid: UUID) -> Profile:
        """Get a profile by its public uuid."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_uuid(uuid)
            if not profile:
                raise ProfileNotFoundError(str(uuid))
            return profile

    async def get_user(self, user_id: UUID) -> User:
        """Get a user by ID."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    async def get_owner_view(self, uuid: UUID) -> UserWithProfile:
        """Get a profile together with its owning user."""
        async with self._uow_factory() as uow:
            owned = await uow.profiles.get_with_owner(uuid)
            if not owned:
                raise ProfileNotFoundError(str(uuid))
            return owned

    async def list_all(self) -> list[UserWithProfile]:
        """Get every user with its profile, oldest first."""
        async with self._uow_factory() as uow:
            return await uow.users.list_with_profiles()  # type: ignore[no-any-return]

    async def update_profile(
        self,
        uuid: UUID,
        patch: ProfilePatch | Mapping[str, Any],
    ) -> Profile:
        """Apply a whole patch to one profile, or nothing at all.

        Writers to the same uuid are serialized in-process and by a row lock.
        """
        if not isinstance(patch, ProfilePatch):
            patch = ProfilePatch.from_mapping(patch, target_uuid=uuid)

        async with self._locks.hold(("profile", uuid)):
            async with self._uow_factory() as uow:
                profile = await uow.profiles.get_by_uuid(uuid, for_update=True)
                if not profile:
                    raise ProfileNotFoundError(str(uuid))

                if not patch:
                    return profile

                profile.apply(patch)
                updated = await uow.profiles.update(profile)
                await uow.commit()

        logger.info("profile_updated", uuid=str(uuid), fields=sorted(patch.changes))
        return updated  # type: ignore[no-any-return]

    async def set_active(self, user_id: UUID, is_active: bool) -> User:
        """Set a user's administrator-controlled active flag."""
        async with self._locks.hold(("user", user_id)):
            async with self._uow_factory() as uow:
                user = await uow.users.set_active(user_id, is_active)
                if not user:
                    raise UserNotFoundError(str(user_id))
                await uow.commit()
                return user

    async def toggle_active(self, user_id: UUID) -> User:
        """Flip a user's active flag under the user's write lock."""
        async with self._locks.hold(("user", user_id)):
            async with self._uow_factory() as uow:
                user = await uow.users.get_for_update(user_id)
                if not user:
                    raise UserNotFoundError(str(user_id))
                updated = await uow.users.set_active(user_id, not user.is_active)
                await uow.commit()
                return updated  # type: ignore[no-any-return]

    async def delete_user(self, user_id: UUID) -> None:
        """Delete a user and, by cascade, its profile. Irreversible."""
        async with self._locks.hold(("user", user_id)):
            async with self._uow_factory() as uow:
                deleted = await uow.users.delete(user_id)
                if not deleted:
                    raise UserNotFoundError(str(user_id))
                await uow.commit()

    async def edit_as_owner(
        self,
        uuid: UUID,
        username: str,
        password: str,
        changes: Mapping[str, Any],
    ) -> Profile:
        """Owner edit flow: re-verify credentials, then patch display fields only."""
        patch = ProfilePatch.from_mapping(
            changes, target_uuid=uuid, allowed=OWNER_EDITABLE_FIELDS
        )

        user = await self._credentials.verify(username, password)

        profile = await self.get_profile(uuid)
        if profile.user_id != user.id:
            logger.info("owner_auth_failed", uuid=str(uuid))
            raise AuthenticationError()

        return await self.update_profile(uuid, patch)
