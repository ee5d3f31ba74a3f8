"""Unit tests for Profile service layer."""

import asyncio
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AuthenticationError,
    DuplicateUsernameError,
    ProfileNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from domain.entities.profile import Profile, ProfilePatch, UserWithProfile
from domain.entities.user import User
from domain.services.profile_service import ProfileService
from infrastructure.auth.password import verify_password
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ProfileService:
    """Create service with fake UoW."""
    return ProfileService(lambda: uow)


def _echo_created(uow: FakeUnitOfWork) -> None:
    async def create_with_profile(user: User, profile: Profile) -> UserWithProfile:
        return UserWithProfile(user=user, profile=profile)

    uow.users.create_with_profile.side_effect = create_with_profile


def _echo_updates(uow: FakeUnitOfWork) -> None:
    async def update(profile: Profile) -> Profile:
        return profile

    uow.profiles.update.side_effect = update


class TestCreateUserWithProfile:
    @pytest.mark.asyncio
    async def test_creates_user_and_unpublished_profile(
        self, service: ProfileService, uow: FakeUnitOfWork
    ) -> None:
        uow.users.get_by_username.return_value = None
        _echo_created(uow)

        result = await service.create_user_with_profile("alice", "secret1", "a@example.com")

        assert result.user.username == "alice"
        assert result.user.email == "a@example.com"
        assert result.user.is_active is True
        assert result.profile.user_id == result.user.id
        assert result.profile.is_published is False
        assert uow.committed

    @pytest.mark.asyncio
    async def test_stores_a_bcrypt_hash_not_the_password(
        self, service: ProfileService, uow: FakeUnitOfWork
    ) -> None:
        uow.users.get_by_username.return_value = None
        _echo_created(uow)

        result = await service.create_user_with_profile("alice", "secret1")

        assert result.user.password_hash != "secret1"
        assert result.user.password_hash.startswith("$2")
        assert verify_password("secret1", result.user.password_hash)

    @pytest.mark.asyncio
    async def test_blank_email_is_stored_as_none(
        self, service: ProfileService, uow: FakeUnitOfWork
    ) -> None:
        uow.users.get_by_username.return_value = None
        _echo_created(uow)

        result = await service.create_user_with_profile("alice", "secret1", "")

        assert result.user.email is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("username", "password", "field"),
        [("", "secret1", "username"), ("  ", "secret1", "username"), ("alice", "", "password")],
    )
    async def test_rejects_missing_credentials(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        username: str,
        password: str,
        field: str,
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.create_user_with_profile(username, password)

        assert exc_info.value.details == {"field": field}
        uow.users.create_with_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejects_password_longer_than_bcrypt_accepts(
        self, service: ProfileService
    ) -> None:
        with pytest.raises(ValidationError):
            await service.create_user_with_profile("alice", "é" * 40)

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts(
        self, service: ProfileService, uow: FakeUnitOfWork, alice: User
    ) -> None:
        uow.users.get_by_username.return_value = alice

        with pytest.raises(DuplicateUsernameError) as exc_info:
            await service.create_user_with_profile("alice", "other")

        assert exc_info.value.status_code == 409
        uow.users.create_with_profile.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_constraint_race_maps_to_conflict(
        self, service: ProfileService, uow: FakeUnitOfWork
    ) -> None:
        uow.users.get_by_username.return_value = None
        uow.users.create_with_profile.side_effect = IntegrityError("INSERT", {}, Exception())

        with pytest.raises(DuplicateUsernameError):
            await service.create_user_with_profile("alice", "secret1")

        assert uow.rolled_back
        assert not uow.committed


class TestReads:
    @pytest.mark.asyncio
    async def test_get_profile_not_found(
        self, service: ProfileService, uow: FakeUnitOfWork
    ) -> None:
        uow.profiles.get_by_uuid.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.get_profile(uuid4())

    @pytest.mark.asyncio
    async def test_get_user_not_found(self, service: ProfileService, uow: FakeUnitOfWork) -> None:
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.get_user(uuid4())

    @pytest.mark.asyncio
    async def test_get_owner_view(
        self, service: ProfileService, uow: FakeUnitOfWork, alice_owned: UserWithProfile
    ) -> None:
        uow.profiles.get_with_owner.return_value = alice_owned

        result = await service.get_owner_view(alice_owned.profile.uuid)

        assert result.user.username == "alice"

    @pytest.mark.asyncio
    async def test_list_all(
        self, service: ProfileService, uow: FakeUnitOfWork, alice_owned: UserWithProfile
    ) -> None:
        uow.users.list_with_profiles.return_value = [alice_owned]

        assert await service.list_all() == [alice_owned]


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_applies_patch_and_commits(
        self, service: ProfileService, uow: FakeUnitOfWork, alice_profile: Profile
    ) -> None:
        uow.profiles.get_by_uuid.return_value = alice_profile
        _echo_updates(uow)

        result = await service.update_profile(alice_profile.uuid, {"name": "Alice"})

        assert result.name == "Alice"
        assert uow.committed
        uow.profiles.get_by_uuid.assert_called_once_with(alice_profile.uuid, for_update=True)

    @pytest.mark.asyncio
    async def test_rejected_patch_writes_nothing(
        self, service: ProfileService, uow: FakeUnitOfWork, alice_profile: Profile
    ) -> None:
        uow.profiles.get_by_uuid.return_value = alice_profile

        with pytest.raises(ValidationError):
            await service.update_profile(
                alice_profile.uuid, {"name": "Alice", "uuid": str(uuid4())}
            )

        assert alice_profile.name is None
        uow.profiles.update.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_empty_patch_is_a_no_op(
        self, service: ProfileService, uow: FakeUnitOfWork, alice_profile: Profile
    ) -> None:
        uow.profiles.get_by_uuid.return_value = alice_profile

        result = await service.update_profile(alice_profile.uuid, ProfilePatch())

        assert result is alice_profile
        uow.profiles.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_profile(self, service: ProfileService, uow: FakeUnitOfWork) -> None:
        uow.profiles.get_by_uuid.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.update_profile(uuid4(), {"name": "x"})

    @pytest.mark.asyncio
    async def test_concurrent_writers_to_one_profile_are_serialized(
        self, service: ProfileService, uow: FakeUnitOfWork, alice_profile: Profile
    ) -> None:
        active = 0
        peak = 0

        async def slow_update(profile: Profile) -> Profile:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1
            return profile

        uow.profiles.get_by_uuid.return_value = alice_profile
        uow.profiles.update.side_effect = slow_update

        await asyncio.gather(
            service.update_profile(alice_profile.uuid, {"name": "A"}),
            service.update_profile(alice_profile.uuid, {"bio": "B"}),
            service.update_profile(alice_profile.uuid, {"website": "C"}),
        )

        assert peak == 1
        assert (alice_profile.name, alice_profile.bio, alice_profile.website) == ("A", "B", "C")


class TestUserLifecycle:
    @pytest.mark.asyncio
    async def test_toggle_active_flips_flag(
        self, service: ProfileService, uow: FakeUnitOfWork, alice: User
    ) -> None:
        uow.users.get_for_update.return_value = alice

        async def set_active(user_id: UUID, is_active: bool) -> User:
            alice.is_active = is_active
            return alice

        uow.users.set_active.side_effect = set_active

        first = await service.toggle_active(alice.id)
        assert first.is_active is False

        second = await service.toggle_active(alice.id)
        assert second.is_active is True

    @pytest.mark.asyncio
    async def test_toggle_unknown_user(self, service: ProfileService, uow: FakeUnitOfWork) -> None:
        uow.users.get_for_update.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.toggle_active(uuid4())

    @pytest.mark.asyncio
    async def test_set_active_unknown_user(
        self, service: ProfileService, uow: FakeUnitOfWork
    ) -> None:
        uow.users.set_active.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.set_active(uuid4(), False)

    @pytest.mark.asyncio
    async def test_delete_user(self, service: ProfileService, uow: FakeUnitOfWork) -> None:
        user_id = uuid4()
        uow.users.delete.return_value = True

        await service.delete_user(user_id)

        uow.users.delete.assert_called_once_with(user_id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_delete_unknown_user(self, service: ProfileService, uow: FakeUnitOfWork) -> None:
        uow.users.delete.return_value = False

        with pytest.raises(UserNotFoundError):
            await service.delete_user(uuid4())


class TestEditAsOwner:
    @pytest.mark.asyncio
    async def test_owner_can_edit_and_publish(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        alice: User,
        alice_profile: Profile,
    ) -> None:
        uow.users.get_by_username.return_value = alice
        uow.profiles.get_by_uuid.return_value = alice_profile
        _echo_updates(uow)

        result = await service.edit_as_owner(
            alice_profile.uuid,
            "alice",
            "secret1",
            {"name": "Alice", "instagram": "alice", "is_published": True},
        )

        assert result.name == "Alice"
        assert result.is_published is True

    @pytest.mark.asyncio
    async def test_wrong_password_changes_nothing(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        alice: User,
        alice_profile: Profile,
    ) -> None:
        uow.users.get_by_username.return_value = alice
        uow.profiles.get_by_uuid.return_value = alice_profile

        with pytest.raises(AuthenticationError):
            await service.edit_as_owner(alice_profile.uuid, "alice", "wrong", {"name": "X"})

        assert alice_profile.name is None
        uow.profiles.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_someone_elses_profile_looks_like_bad_credentials(
        self,
        service: ProfileService,
        uow: FakeUnitOfWork,
        alice: User,
    ) -> None:
        other_profile = Profile(user_id=uuid4())
        uow.users.get_by_username.return_value = alice
        uow.profiles.get_by_uuid.return_value = other_profile

        with pytest.raises(AuthenticationError) as exc_info:
            await service.edit_as_owner(other_profile.uuid, "alice", "secret1", {"name": "X"})

        assert exc_info.value.message == "Invalid username or password"
        uow.profiles.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_owner_cannot_touch_qr_asset(
        self, service: ProfileService, uow: FakeUnitOfWork, alice_profile: Profile
    ) -> None:
        with pytest.raises(ValidationError):
            await service.edit_as_owner(
                alice_profile.uuid, "alice", "secret1", {"qr_asset": None}
            )

        uow.users.get_by_username.assert_not_called()
