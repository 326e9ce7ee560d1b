"""Scraper package — SSRF-guarded fetch & preview extraction."""

from linkpreview.scraper.errors import (
    ContentError,
    NetworkError,
    PreviewError,
    ValidationError,
)
from linkpreview.scraper.extractor import extract_preview, meta_lookup
from linkpreview.scraper.fetcher import fetch_html
from linkpreview.scraper.models import (
    FetchLimits,
    FetchResult,
    HostClass,
    PreviewRequest,
    PreviewResult,
    ValidatedTarget,
)
from linkpreview.scraper.netguard import classify_host
from linkpreview.scraper.normalize import extract_domain, normalize_url
from linkpreview.scraper.validator import validate_url

__all__ = [
    "classify_host",
    "validate_url",
    "fetch_html",
    "extract_preview",
    "meta_lookup",
    "normalize_url",
    "extract_domain",
    "FetchLimits",
    "FetchResult",
    "HostClass",
    "PreviewRequest",
    "PreviewResult",
    "ValidatedTarget",
    "PreviewError",
    "ValidationError",
    "NetworkError",
    "ContentError",
]
