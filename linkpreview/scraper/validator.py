"""Destination validation run before every network contact.

The same :func:`validate_url` guards the initial URL and each redirect
target, so a public name cannot bounce the fetcher into private space.
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from linkpreview.scraper import netguard
from linkpreview.scraper.errors import (
    InvalidUrlError,
    PrivateDestinationError,
    SchemeNotAllowedError,
)
from linkpreview.scraper.models import HostClass, ValidatedTarget

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})


async def validate_url(url: str, allowed_schemes: frozenset[str] = ALLOWED_SCHEMES) -> ValidatedTarget:
    """Check *url* and return a :class:`ValidatedTarget`.

    Raises:
        InvalidUrlError: The URL has no scheme or no host.
        SchemeNotAllowedError: The scheme is not ``http``/``https``.
        PrivateDestinationError: The host is, or resolves to, private space.
    """
    candidate = (url or "").strip()
    try:
        parts = urlsplit(candidate)
        host = parts.hostname or ""
    except ValueError as exc:
        raise InvalidUrlError(candidate) from exc

    scheme = parts.scheme.lower()
    if not scheme:
        raise InvalidUrlError(candidate)
    if scheme not in allowed_schemes:
        logger.warning("Rejected %r: scheme %r not allowed", candidate, scheme)
        raise SchemeNotAllowedError(scheme)
    if not parts.netloc or not host:
        raise InvalidUrlError(candidate)

    host_class = await netguard.classify_host(host)
    if host_class is not HostClass.PUBLIC:
        logger.warning("Rejected %r: host %r is private", candidate, host)
        raise PrivateDestinationError(host)

    return ValidatedTarget(url=candidate, scheme=scheme, host=host, host_class=host_class)
