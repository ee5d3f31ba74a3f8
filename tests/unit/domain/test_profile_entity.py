"""Unit tests for the Profile entity, ProfilePatch and the visibility rule."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from core.exceptions import ValidationError
from domain.entities.profile import (
    OWNER_EDITABLE_FIELDS,
    Platform,
    Profile,
    ProfilePatch,
    Visibility,
    visibility,
)
from domain.entities.qr import QRAsset
from domain.entities.user import User


@pytest.fixture
def profile() -> Profile:
    return Profile(user_id=uuid4())


class TestProfile:
    def test_new_profile_is_unpublished_and_empty(self, profile: Profile) -> None:
        assert profile.is_published is False
        assert profile.name is None
        assert profile.qr_asset is None
        assert set(profile.social_handles) == set(Platform)
        assert all(value is None for value in profile.social_handles.values())

    def test_apply_sets_display_and_social_fields(self, profile: Profile) -> None:
        patch = ProfilePatch.from_mapping(
            {"name": "Alice", "instagram": "alice", "is_published": True},
            target_uuid=profile.uuid,
        )

        profile.apply(patch)

        assert profile.name == "Alice"
        assert profile.social_handles[Platform.INSTAGRAM] == "alice"
        assert profile.is_published is True

    def test_apply_leaves_absent_fields_untouched(self, profile: Profile) -> None:
        profile.bio = "hello"
        profile.apply(ProfilePatch.from_mapping({"name": "Alice"}, target_uuid=profile.uuid))

        assert profile.bio == "hello"

    def test_apply_advances_updated_at(self, profile: Profile) -> None:
        profile.updated_at = datetime.utcnow() - timedelta(days=1)
        before = profile.updated_at

        profile.apply(ProfilePatch.from_mapping({"bio": "x"}, target_uuid=profile.uuid))

        assert profile.updated_at > before
        assert profile.created_at <= profile.updated_at

    def test_null_clears_a_field(self, profile: Profile) -> None:
        profile.website = "alice.dev"
        profile.apply(ProfilePatch.from_mapping({"website": None}, target_uuid=profile.uuid))

        assert profile.website is None


class TestProfilePatch:
    def test_matching_uuid_is_dropped(self, profile: Profile) -> None:
        patch = ProfilePatch.from_mapping(
            {"uuid": str(profile.uuid), "name": "Alice"}, target_uuid=profile.uuid
        )

        assert dict(patch.changes) == {"name": "Alice"}

    def test_different_uuid_is_rejected(self, profile: Profile) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProfilePatch.from_mapping({"uuid": str(uuid4())}, target_uuid=profile.uuid)

        assert exc_info.value.details == {"field": "uuid"}

    def test_malformed_uuid_is_rejected(self, profile: Profile) -> None:
        with pytest.raises(ValidationError):
            ProfilePatch.from_mapping({"uuid": "not-a-uuid"}, target_uuid=profile.uuid)

    def test_unknown_fields_are_rejected_together(self, profile: Profile) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProfilePatch.from_mapping(
                {"name": "ok", "user_id": "x", "created_at": "y"}, target_uuid=profile.uuid
            )

        assert exc_info.value.details == {"fields": ["created_at", "user_id"]}

    def test_owner_allow_list_rejects_qr_asset(self, profile: Profile) -> None:
        asset = QRAsset(payload="p", data_url="data:image/png;base64,AA==")

        with pytest.raises(ValidationError):
            ProfilePatch.from_mapping(
                {"qr_asset": asset}, target_uuid=profile.uuid, allowed=OWNER_EDITABLE_FIELDS
            )

    def test_internal_patch_accepts_qr_asset(self, profile: Profile) -> None:
        asset = QRAsset(payload="p", data_url="data:image/png;base64,AA==")

        patch = ProfilePatch.from_mapping({"qr_asset": asset}, target_uuid=profile.uuid)

        assert patch.changes["qr_asset"] is asset

    @pytest.mark.parametrize(
        ("key", "value"),
        [("name", 5), ("instagram", ["a"]), ("is_published", "yes"), ("qr_asset", "x")],
    )
    def test_wrong_types_are_rejected(self, profile: Profile, key: str, value: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProfilePatch.from_mapping({key: value}, target_uuid=profile.uuid)

        assert exc_info.value.details == {"field": key}

    def test_empty_patch_is_falsy(self, profile: Profile) -> None:
        assert not ProfilePatch.from_mapping({}, target_uuid=profile.uuid)
        assert not ProfilePatch.from_mapping({"uuid": profile.uuid}, target_uuid=profile.uuid)


class TestVisibility:
    @pytest.mark.parametrize(
        ("is_published", "is_active", "expected"),
        [
            (True, True, Visibility.VISIBLE),
            (True, False, Visibility.INACTIVE),
            (False, True, Visibility.NOT_PUBLISHED),
            (False, False, Visibility.NOT_PUBLISHED),
        ],
    )
    def test_truth_table(self, is_published: bool, is_active: bool, expected: Visibility) -> None:
        user = User(username="alice", password_hash="x", is_active=is_active)
        profile = Profile(user_id=user.id, is_published=is_published)

        assert visibility(profile, user) is expected
