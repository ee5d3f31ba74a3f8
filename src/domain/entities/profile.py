"""Profile domain entity and its patch/visibility rules."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from core.exceptions import ValidationError
from domain.entities.qr import QRAsset
from domain.entities.user import User


class Platform(StrEnum):
    """Social platforms a profile can link to."""

    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    LINKEDIN = "linkedin"
    FACEBOOK = "facebook"


class Visibility(StrEnum):
    """Outcome of the public visibility gate."""

    VISIBLE = "visible"
    NOT_PUBLISHED = "not_published"
    INACTIVE = "inactive"


DISPLAY_FIELDS = frozenset({"name", "bio", "avatar", "website"})
SOCIAL_FIELDS = frozenset(platform.value for platform in Platform)
TEXT_FIELDS = DISPLAY_FIELDS | SOCIAL_FIELDS

# Fields an owner may change through the credential-gated edit flow
OWNER_EDITABLE_FIELDS = TEXT_FIELDS | {"is_published"}

# Fields the store accepts from any internal caller
PROFILE_PATCH_FIELDS = OWNER_EDITABLE_FIELDS | {"qr_asset"}


@dataclass
class Profile:
    """Domain entity for a link-in-bio profile, owned one-to-one by a User."""

    user_id: UUID
    uuid: UUID = field(default_factory=uuid4)
    name: str | None = None
    bio: str | None = None
    avatar: str | None = None
    social_handles: dict[Platform, str | None] = field(default_factory=dict)
    website: str | None = None
    is_published: bool = False
    qr_asset: QRAsset | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Key every platform so the handle map is always exhaustive."""
        self.social_handles = {
            platform: self.social_handles.get(platform) for platform in Platform
        }
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def apply(self, patch: "ProfilePatch") -> None:
        """Apply every change in the patch."""
        for key, value in patch.changes.items():
            if key in SOCIAL_FIELDS:
                self.social_handles[Platform(key)] = value
            else:
                setattr(self, key, value)
        self.updated_at = datetime.utcnow()


@dataclass(frozen=True, slots=True)
class ProfilePatch:
    """A validated set of field changes for one profile.

    Build it with :meth:`from_mapping`; only keys present in the source
    mapping end up in ``changes``.
    """

    changes: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        target_uuid: UUID,
        allowed: frozenset[str] = PROFILE_PATCH_FIELDS,
    ) -> "ProfilePatch":
        """Validate raw changes against the profile they target.

        A ``uuid`` key equal to ``target_uuid`` is dropped; any other value
        is rejected, as is every key outside ``allowed``.
        """
        changes: dict[str, Any] = {}
        unknown: list[str] = []

        for key, value in data.items():
            if key == "uuid":
                _check_uuid(value, target_uuid)
                continue
            if key not in allowed:
                unknown.append(key)
                continue
            changes[key] = _check_value(key, value)

        if unknown:
            raise ValidationError(
                f"Unknown or read-only fields: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        return cls(changes=changes)

    def __bool__(self) -> bool:
        return bool(self.changes)


def _check_uuid(value: Any, target_uuid: UUID) -> None:
    try:
        candidate = value if isinstance(value, UUID) else UUID(str(value))
    except ValueError:
        raise ValidationError("uuid is immutable", details={"field": "uuid"}) from None
    if candidate != target_uuid:
        raise ValidationError("uuid is immutable", details={"field": "uuid"})


def _check_value(key: str, value: Any) -> Any:
    if key in TEXT_FIELDS:
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{key} must be a string", details={"field": key})
    elif key == "is_published":
        if not isinstance(value, bool):
            raise ValidationError("is_published must be a boolean", details={"field": key})
    elif key == "qr_asset":
        if value is not None and not isinstance(value, QRAsset):
            raise ValidationError("qr_asset must be a QR asset", details={"field": key})
    return value


@dataclass(frozen=True, slots=True)
class UserWithProfile:
    """Read-only value object: a User bundled with its Profile."""

    user: User
    profile: Profile


@dataclass(frozen=True, slots=True)
class PublicView:
    """The sanitized projection of a profile that anyone may see."""

    uuid: UUID
    name: str | None
    bio: str | None
    avatar: str | None
    social_links: dict[Platform, str]
    website: str | None


def visibility(profile: Profile, user: User) -> Visibility:
    """Derive public visibility. Publish state is checked before activity."""
    if not profile.is_published:
        return Visibility.NOT_PUBLISHED
    if not user.is_active:
        return Visibility.INACTIVE
    return Visibility.VISIBLE
