"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, AuthorizationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import IAuthProvider, TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_admin(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the authenticated administrator.

    Raises:
        AuthenticationError: If no token provided or token is invalid
        AuthorizationError: If the token does not carry the admin role
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    operator = await auth_provider.validate_token(credentials.credentials)

    if not operator:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    if not operator.is_admin:
        raise AuthorizationError("Administrator role required")

    return operator


# Type alias for convenience in route handlers
AdminUser = Annotated[TokenUser, Depends(get_current_admin)]
