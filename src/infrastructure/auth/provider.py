"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol

ADMIN_ROLE = "admin"


@dataclass
class TokenUser:
    """Represents an operator extracted from an auth token."""

    subject: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """
        Create an authentication token for a user.

        Args:
            user: The user to create a token for

        Returns:
            The generated token string
        """
        ...
