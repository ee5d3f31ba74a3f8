"""Public URLs derived from a profile uuid."""

from uuid import UUID


class LinkBuilder:
    """Build edit, scan and label URLs rooted at the deployment's base address."""

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    def edit_url(self, uuid: UUID) -> str:
        return f"{self._base_url}/edit/{uuid}"

    def scan_url(self, uuid: UUID) -> str:
        """The URL every QR code for this profile encodes."""
        return f"{self._base_url}/scan/{uuid}"

    def label_url(self, uuid: UUID) -> str:
        return f"{self._base_url}/public/{uuid}"
