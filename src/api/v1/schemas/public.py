"""Pydantic schemas for the public profile API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PublicProfileResponse(BaseModel):
    """Schema for the sanitized public view of a profile."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "uuid": "9b2f7d2e-3c1a-4b8e-a6c1-1f0e2d3c4b5a",
                "name": "Alice",
                "bio": "Maker of things",
                "avatar": "https://example.com/alice.jpg",
                "social_links": {"instagram": "https://instagram.com/alice"},
                "website": "https://alice.dev",
            }
        },
    )

    uuid: UUID
    name: str | None = None
    bio: str | None = None
    avatar: str | None = None
    social_links: dict[str, str]
    website: str | None = None


class PublicProfileDetailResponse(BaseModel):
    """Schema for single public profile."""

    data: PublicProfileResponse


class LabelResponse(BaseModel):
    """Schema for the printable label: name and the URL its QR code encodes."""

    uuid: UUID
    name: str | None = None
    scan_url: str


class LabelDetailResponse(BaseModel):
    """Schema for single label."""

    data: LabelResponse
