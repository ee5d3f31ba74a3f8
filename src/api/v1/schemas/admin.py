"""Pydantic schemas for the administrator API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.entities.qr import ErrorCorrection, ImageFormat


class UserCreate(BaseModel):
    """Schema for provisioning a user and its profile."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "secret1",
                "email": "alice@example.com",
            }
        },
    )

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)
    email: str | None = Field(None, max_length=255)


class UserResponse(BaseModel):
    """Schema for a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str | None = None
    is_active: bool
    created_at: datetime


class ProfileSummary(BaseModel):
    """Schema for the profile columns of the admin user list."""

    uuid: UUID
    name: str | None = None
    is_published: bool
    qr_code: str | None = None
    edit_url: str
    scan_url: str
    label_url: str


class AdminUserResponse(UserResponse):
    """Schema for a user together with its profile summary."""

    profile: ProfileSummary


class AdminUserDetailResponse(BaseModel):
    """Schema for single admin user."""

    data: AdminUserResponse


class AdminUserListResponse(BaseModel):
    """Schema for list of admin users."""

    data: list[AdminUserResponse]


class UserDetailResponse(BaseModel):
    """Schema for single user."""

    data: UserResponse


class QRRegenerateRequest(BaseModel):
    """Rendering options for a forced regeneration. All optional."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    box_size: int | None = Field(None, ge=1, le=50)
    border: int | None = Field(None, ge=0, le=20)
    error_correction: ErrorCorrection | None = None
    fill_color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    back_color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    image_format: ImageFormat | None = None


class QRAssetResponse(BaseModel):
    """Schema for a rendered QR asset."""

    uuid: UUID
    payload: str
    qr_code: str
    generated_at: datetime


class QRAssetDetailResponse(BaseModel):
    """Schema for single QR asset."""

    data: QRAssetResponse
