"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.entities.qr import ErrorCorrection, QRRenderOptions
from domain.services.admin_service import AdminService
from domain.services.credential_service import CredentialService
from domain.services.link_builder import LinkBuilder
from domain.services.profile_service import ProfileService
from domain.services.public_profile_service import PublicProfileService
from domain.services.qr_service import QRCodeService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.qr.qrcode_renderer import QRCodeRenderer


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_link_builder() -> LinkBuilder:
    """Get the link builder rooted at the configured public base URL."""
    return LinkBuilder(settings.public_base_url)


@lru_cache
def get_credential_service() -> CredentialService:
    """Get Credential service instance."""
    return CredentialService(get_uow_factory())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        credential_service=get_credential_service(),
    )


@lru_cache
def get_qr_service() -> QRCodeService:
    """Get QR code service instance."""
    return QRCodeService(
        get_uow_factory(),
        links=get_link_builder(),
        renderer=QRCodeRenderer(),
        default_options=QRRenderOptions(
            box_size=settings.qr_box_size,
            border=settings.qr_border,
            error_correction=ErrorCorrection(settings.qr_error_correction),
        ),
    )


@lru_cache
def get_public_profile_service() -> PublicProfileService:
    """Get Public profile service instance."""
    return PublicProfileService(get_uow_factory(), links=get_link_builder())


@lru_cache
def get_admin_service() -> AdminService:
    """Get Admin service instance."""
    return AdminService(get_profile_service(), get_qr_service())
