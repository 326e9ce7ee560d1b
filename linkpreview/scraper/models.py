"""Data models for the preview pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from typing import Any, Optional


class HostClass(str, enum.Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class FetchLimits:
    """Resource bounds applied to one multi-hop fetch."""

    max_bytes: int = 512 * 1024
    max_redirects: int = 3
    timeout: float = 5.0
    user_agent: str = "Mozilla/5.0 (compatible; LinkPreview-Bot/1.0)"


@dataclass
class PreviewRequest:
    """Either ``raw_html`` or ``url``; non-empty ``raw_html`` wins."""

    url: Optional[str] = None
    raw_html: Optional[str] = None


@dataclass(frozen=True)
class ValidatedTarget:
    """A destination that passed scheme and private-network checks.

    Only :func:`~linkpreview.scraper.validator.validate_url` builds these, so
    ``host_class`` is always :attr:`HostClass.PUBLIC`.
    """

    url: str
    scheme: str
    host: str
    host_class: HostClass = HostClass.PUBLIC


@dataclass
class FetchResult:
    """The decoded body of the final hop of a fetch."""

    html: str
    final_url: str
    redirect_count: int = 0


@dataclass
class PreviewResult:
    """Preview fields for one page.  Every field is optional."""

    title: Optional[str] = None
    image: Optional[str] = None
    price: Optional[str] = None
    currency: Optional[str] = None
    site_name: Optional[str] = None
    source_url: Optional[str] = None

    _WIRE_NAMES = {"site_name": "siteName", "source_url": "sourceUrl"}

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form: camelCase keys, undetermined fields omitted."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out[self._WIRE_NAMES.get(f.name, f.name)] = value
        return out
