"""Read-only public visibility gate."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from core.exceptions import (
    AccountInactiveError,
    ProfileNotFoundError,
    ProfileNotPublishedError,
)
from domain.entities.profile import Profile, PublicView, UserWithProfile, Visibility, visibility
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.canonicalizer import canonicalize_handles, canonicalize_website
from domain.services.link_builder import LinkBuilder


@dataclass(frozen=True, slots=True)
class PublicLabel:
    """What a printable label shows: the owner's name and the scan URL."""

    uuid: UUID
    name: str | None
    scan_url: str


class PublicProfileService:
    """Turn a stored profile into something safe to show anyone."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork], links: LinkBuilder) -> None:
        self._uow_factory = uow_factory
        self._links = links

    async def resolve(self, uuid: UUID) -> PublicView:
        """Return the public view, or raise the first denial that applies.

        Order: not found, not published, owner inactive.
        """
        owned = await self._get_visible(uuid)
        return to_public_view(owned.profile)

    async def resolve_label(self, uuid: UUID) -> PublicLabel:
        """Same gate as :meth:`resolve`, projected for the printable label."""
        owned = await self._get_visible(uuid)
        return PublicLabel(
            uuid=owned.profile.uuid,
            name=owned.profile.name,
            scan_url=self._links.scan_url(owned.profile.uuid),
        )

    async def _get_visible(self, uuid: UUID) -> UserWithProfile:
        async with self._uow_factory() as uow:
            owned = await uow.profiles.get_with_owner(uuid)

        if owned is None:
            raise ProfileNotFoundError(str(uuid))

        state = visibility(owned.profile, owned.user)
        if state is Visibility.NOT_PUBLISHED:
            raise ProfileNotPublishedError(str(uuid))
        if state is Visibility.INACTIVE:
            raise AccountInactiveError(str(uuid))

        return owned


def to_public_view(profile: Profile) -> PublicView:
    """Project a profile onto the fields the public may see, links canonicalized."""
    return PublicView(
        uuid=profile.uuid,
        name=profile.name,
        bio=profile.bio,
        avatar=profile.avatar,
        social_links=canonicalize_handles(profile.social_handles),
        website=canonicalize_website(profile.website),
    )
