"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Visibility denials (403)
    PROFILE_NOT_PUBLISHED = "PROFILE_NOT_PUBLISHED"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    DUPLICATE_USERNAME = "DUPLICATE_USERNAME"

    # Server errors (500, 503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed.

    Carries no hint about which credential was wrong.
    """

    def __init__(
        self,
        message: str = "Invalid username or password",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class ValidationError(AppException):
    """Missing or malformed input."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details=details,
        )


class DuplicateUsernameError(AppException):
    """Username is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_USERNAME,
            message=f"Username already exists: {username}",
            status_code=409,
            details={"username": username},
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, uuid: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {uuid}",
            status_code=404,
            details={"uuid": uuid},
        )


class ProfileNotPublishedError(AppException):
    """Profile exists but its owner has not published it."""

    def __init__(self, uuid: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_PUBLISHED,
            message="This profile is not published",
            status_code=403,
            details={"uuid": uuid},
        )


class AccountInactiveError(AppException):
    """Owning account has been disabled by an administrator."""

    def __init__(self, uuid: str) -> None:
        super().__init__(
            error_code=ErrorCode.ACCOUNT_INACTIVE,
            message="This account has been disabled",
            status_code=403,
            details={"uuid": uuid},
        )


class ServiceUnavailableError(AppException):
    """Persistence layer is unreachable."""

    def __init__(self, message: str = "Storage is temporarily unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            message=message,
            status_code=503,
        )
