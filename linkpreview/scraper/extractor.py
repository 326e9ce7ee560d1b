"""Preview metadata extraction: turns HTML into a :class:`PreviewResult`.

Each field walks its own fallback chain and stops at the first hit:

    title     og:title → twitter:title → <title> → first <h1>
    image     og:image → twitter:image → first <img src>
    siteName  og:site_name → twitter:site → hostname of the source URL
    price     product:price:amount (+ product:price:currency) → text scan

Malformed markup never raises; a field that cannot be determined is simply
left unset.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from linkpreview.scraper.models import PreviewResult
from linkpreview.scraper.rules import PRICE_PATTERNS

logger = logging.getLogger(__name__)

_META_KEY_ATTRS = ("name", "property", "itemprop", "http-equiv")
_META_VALUE_ATTRS = ("content", "value", "charset")
_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def meta_lookup(soup: BeautifulSoup, names: Sequence[str]) -> Optional[str]:
    """Return the first non-empty ``<meta>`` value matching any of *names*.

    For each candidate name, in order, the ``name``, ``property``,
    ``itemprop`` and ``http-equiv`` attributes are tried; within a matching
    element the first non-blank of ``content``, ``value`` and ``charset`` wins.
    """
    for name in names:
        for key_attr in _META_KEY_ATTRS:
            element = soup.find("meta", attrs={key_attr: name})
            if element is None:
                continue
            for value_attr in _META_VALUE_ATTRS:
                value = element.get(value_attr)
                if isinstance(value, str) and value.strip():
                    return value.strip()
    return None


def _element_text(soup: BeautifulSoup, tag: str) -> Optional[str]:
    element = soup.find(tag)
    if element is None:
        return None
    text = element.get_text(" ", strip=True)
    return text or None


def _first_image(soup: BeautifulSoup) -> Optional[str]:
    for img in soup.find_all("img", src=True):
        src = img["src"].strip()
        if src:
            return src
    return None


def _hostname(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


def _visible_text(soup: BeautifulSoup) -> str:
    for tag in soup(_INVISIBLE_TAGS):
        tag.decompose()
    return soup.get_text(" ")


def scan_price(text: str) -> tuple[Optional[str], Optional[str]]:
    """Return ``(amount, currency)`` from the first price pattern that matches."""
    for pattern, currency in PRICE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1), currency
    return None, None


def _guarded(label: str, func: Callable[[], Optional[str]]) -> Optional[str]:
    try:
        return func()
    except Exception:  # noqa: BLE001
        logger.debug("Extraction step %r failed", label, exc_info=True)
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_preview(html: str, source_url: Optional[str] = None) -> PreviewResult:
    """Extract preview fields from *html*.

    *source_url* is copied into the result unchanged and, when no site-name
    meta tag exists, its hostname becomes ``site_name``.
    """
    result = PreviewResult(source_url=source_url or None)
    try:
        soup = BeautifulSoup(html or "", "html.parser")
    except Exception:  # noqa: BLE001
        logger.debug("HTML could not be parsed", exc_info=True)
        return result

    result.title = _guarded("title", lambda: (
        meta_lookup(soup, ["og:title"])
        or meta_lookup(soup, ["twitter:title"])
        or _element_text(soup, "title")
        or _element_text(soup, "h1")
    ))
    result.image = _guarded("image", lambda: (
        meta_lookup(soup, ["og:image"])
        or meta_lookup(soup, ["twitter:image"])
        or _first_image(soup)
    ))
    result.site_name = _guarded("site_name", lambda: (
        meta_lookup(soup, ["og:site_name"])
        or meta_lookup(soup, ["twitter:site"])
        or _hostname(source_url)
    ))

    amount = _guarded("price", lambda: meta_lookup(soup, ["product:price:amount"]))
    if amount:
        result.price = amount
        result.currency = _guarded("currency", lambda: meta_lookup(soup, ["product:price:currency"]))
    else:
        # Runs last: stripping invisible tags mutates the tree.
        text = _guarded("text", lambda: _visible_text(soup)) or ""
        result.price, result.currency = scan_price(text)

    return result
