"""Turn raw social handles and website values into fully-qualified links."""

from collections.abc import Mapping
from urllib.parse import quote

from domain.entities.profile import Platform

# Characters left unescaped in an interpolated handle
_SAFE_HANDLE_CHARS = "/.-_~"

_TEMPLATES: dict[Platform, str] = {
    Platform.INSTAGRAM: "https://instagram.com/{handle}",
    Platform.TWITTER: "https://twitter.com/{handle}",
    Platform.TIKTOK: "https://tiktok.com/@{handle}",
    Platform.YOUTUBE: "https://youtube.com/@{handle}",
    Platform.LINKEDIN: "https://linkedin.com/in/{handle}",
    Platform.FACEBOOK: "https://facebook.com/{handle}",
}

# Platforms whose values are trusted as-is once they name the platform's domain
_DOMAIN_PASSTHROUGH: dict[Platform, str] = {
    Platform.LINKEDIN: "linkedin.com",
    Platform.FACEBOOK: "facebook.com",
}


def canonicalize(platform: Platform, raw: str | None) -> str | None:
    """Return the link for a handle or URL, or None when there is nothing to link.

    >>> canonicalize(Platform.TIKTOK, "@someone")
    'https://tiktok.com/@someone'
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    if value.startswith(("http://", "https://")):
        return value

    domain = _DOMAIN_PASSTHROUGH.get(platform)
    if domain and domain in value:
        return value

    handle = value.removeprefix("@")
    return _TEMPLATES[platform].format(handle=quote(handle, safe=_SAFE_HANDLE_CHARS))


def canonicalize_website(raw: str | None) -> str | None:
    """Return a website link, assuming https when no scheme is given."""
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    if value.startswith("http"):
        return value
    return f"https://{value}"


def canonicalize_handles(handles: Mapping[Platform, str | None]) -> dict[Platform, str]:
    """Canonicalize every platform, dropping the ones with nothing to link."""
    links: dict[Platform, str] = {}
    for platform in Platform:
        link = canonicalize(platform, handles.get(platform))
        if link is not None:
            links[platform] = link
    return links
