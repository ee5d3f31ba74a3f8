"""Stateless owner credential verification."""

import asyncio
from collections.abc import Callable

import structlog

from core.exceptions import AuthenticationError
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.password import hash_password, verify_password

logger = structlog.get_logger()


class CredentialService:
    """Verify a username/password pair on every call. Issues no session."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory
        self._dummy_hash: str | None = None

    async def verify(self, username: str, password: str) -> User:
        """Return the matching user or raise AuthenticationError.

        Unknown usernames and wrong passwords raise the same error, and both
        paths pay for one bcrypt comparison.
        """
        user: User | None = None
        if username and password:
            async with self._uow_factory() as uow:
                user = await uow.users.get_by_username(username)

        if user is None:
            await asyncio.to_thread(verify_password, password or "", await self._get_dummy_hash())
            logger.info("owner_auth_failed")
            raise AuthenticationError()

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            logger.info("owner_auth_failed")
            raise AuthenticationError()

        return user

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(hash_password, "not-a-real-password")
        return self._dummy_hash
