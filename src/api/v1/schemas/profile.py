"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProfileFields(BaseModel):
    """Owner-editable profile fields. Omitted fields are left untouched."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    name: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=1000)
    avatar: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=255)
    twitter: str | None = Field(None, max_length=255)
    tiktok: str | None = Field(None, max_length=255)
    youtube: str | None = Field(None, max_length=255)
    linkedin: str | None = Field(None, max_length=255)
    facebook: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    is_published: bool | None = None


class ProfileUpdate(ProfileFields):
    """Schema for an owner update: credentials travel with every request."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "secret1",
                "name": "Alice",
                "instagram": "@alice",
                "isPublished": True,
            }
        },
    )

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)
    uuid: UUID | None = None

    def changes(self) -> dict:
        """Only the profile fields the client actually sent."""
        return self.model_dump(exclude_unset=True, exclude={"username", "password"})


class ProfileResponse(BaseModel):
    """Schema for a full profile."""

    model_config = ConfigDict(from_attributes=True)

    uuid: UUID
    name: str | None = None
    bio: str | None = None
    avatar: str | None = None
    instagram: str | None = None
    twitter: str | None = None
    tiktok: str | None = None
    youtube: str | None = None
    linkedin: str | None = None
    facebook: str | None = None
    website: str | None = None
    is_published: bool
    qr_code: str | None = None
    qr_generated_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProfileOwner(BaseModel):
    """The owning account as shown on the edit page."""

    username: str
    is_active: bool


class OwnerProfileResponse(ProfileResponse):
    """Schema for the owner view: the profile plus its account state."""

    user: ProfileOwner
    edit_url: str
    scan_url: str


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class OwnerProfileDetailResponse(BaseModel):
    """Schema for single owner view."""

    data: OwnerProfileResponse
