"""URL canonicalization for display and de-duplication.

Two URLs with the same :func:`normalize_url` output are the same bookmark.
"""

from __future__ import annotations

from typing import Collection, Sequence
from urllib.parse import unquote_plus, urlsplit, urlunsplit

from linkpreview.scraper.rules import TRACKING_PARAMS, TRACKING_PREFIXES

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _is_tracking(key: str, params: Collection[str], prefixes: Sequence[str]) -> bool:
    return key in params or key.startswith(tuple(prefixes))


def _strip_query(query: str, params: Collection[str], prefixes: Sequence[str]) -> str:
    # Kept pairs retain their original encoding so the result is stable.
    kept = []
    for pair in query.split("&"):
        if not pair:
            continue
        key = unquote_plus(pair.split("=", 1)[0])
        if not _is_tracking(key, params, prefixes):
            kept.append(pair)
    return "&".join(kept)


def normalize_url(
    url: str,
    tracking_params: Collection[str] = TRACKING_PARAMS,
    tracking_prefixes: Sequence[str] = TRACKING_PREFIXES,
) -> str:
    """Return the canonical form of *url*, or *url* itself if it cannot be parsed.

    The scheme and host are lowercased, default ports and the fragment are
    dropped, an empty path becomes ``/``, and tracking parameters are removed.
    A query left empty leaves no ``?`` behind.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
        port = parts.port
    except (ValueError, TypeError, AttributeError):
        return url
    if not parts.scheme or not host:
        return url

    scheme = parts.scheme.lower()
    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{port}"
    if "@" in parts.netloc:
        netloc = parts.netloc.rsplit("@", 1)[0] + "@" + netloc

    query = _strip_query(parts.query, tracking_params, tracking_prefixes)
    return urlunsplit((scheme, netloc, parts.path or "/", query, ""))


def extract_domain(url: str) -> str:
    """Return the display hostname of *url* without a leading ``www.``."""
    try:
        host = urlsplit(url).hostname
    except (ValueError, TypeError, AttributeError):
        host = None
    if not host:
        return "Unknown source"
    return host[4:] if host.startswith("www.") else host
