"""JWT authentication provider for administrator tokens.

Payload structure:
    {
        "sub": "operator-name",
        "role": "admin",
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser


class JWTAuthProvider:
    """HS256 JWT provider guarding the administrator API."""

    def __init__(
        self,
        secret_key: str = settings.admin_jwt_secret,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the operator.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid, expired or missing ``sub``
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError:
            return None

        subject = payload.get("sub")
        if not subject:
            return None

        return TokenUser(subject=str(subject), role=payload.get("role"))

    def create_token(self, user: TokenUser) -> str:
        """
        Create a signed JWT for an operator.

        Args:
            user: The operator to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": user.subject,
            "role": user.role,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
