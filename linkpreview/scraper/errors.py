"""Error taxonomy for the preview pipeline.

Every failure the caller is allowed to see derives from :class:`PreviewError`
and carries a message that names the violated rule.  The HTTP layer maps the
whole family to ``400``; anything else is an internal error.
"""

from __future__ import annotations


class PreviewError(Exception):
    """Base class for terminal, client-facing preview failures."""

    reason: str = "preview_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class ValidationError(PreviewError):
    reason = "validation_error"


class MissingInputError(ValidationError):
    reason = "missing_input"

    def __init__(self) -> None:
        super().__init__('Either "url" or "raw_html" must be provided')


class InvalidUrlError(ValidationError):
    reason = "invalid_url"

    def __init__(self, url: str) -> None:
        super().__init__("Failed to fetch URL: Invalid URL")
        self.url = url


class SchemeNotAllowedError(ValidationError):
    reason = "scheme_not_allowed"

    def __init__(self, scheme: str) -> None:
        super().__init__("Only HTTP and HTTPS protocols are allowed")
        self.scheme = scheme


class PrivateDestinationError(ValidationError):
    reason = "private_destination"

    def __init__(self, host: str) -> None:
        super().__init__("Private IP addresses are not allowed")
        self.host = host


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------

class NetworkError(PreviewError):
    reason = "network_error"


class FetchTimeoutError(NetworkError):
    reason = "timeout"

    def __init__(self, timeout: float) -> None:
        super().__init__("Failed to fetch URL (timeout)")
        self.timeout = timeout


class FetchConnectionError(NetworkError):
    reason = "connection_error"

    def __init__(self, detail: str = "") -> None:
        super().__init__("Failed to fetch URL: connection error")
        self.detail = detail


class TooManyRedirectsError(NetworkError):
    reason = "too_many_redirects"

    def __init__(self, max_redirects: int) -> None:
        super().__init__(f"Failed to fetch URL: too many redirects (max {max_redirects})")
        self.max_redirects = max_redirects


class FetchFailedError(NetworkError):
    reason = "fetch_failed"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Failed to fetch URL (HTTP {status_code})")
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

class ContentError(PreviewError):
    reason = "content_error"


class UnsupportedContentTypeError(ContentError):
    reason = "content_type"

    def __init__(self, content_type: str) -> None:
        super().__init__("URL must return HTML content")
        self.content_type = content_type


class ContentTooLargeError(ContentError):
    reason = "content_too_large"

    def __init__(self, max_bytes: int) -> None:
        super().__init__(f"Content size exceeds {max_bytes // 1024}KB limit")
        self.max_bytes = max_bytes


class UndecodableContentError(ContentError):
    reason = "content_encoding"

    def __init__(self, encoding: str) -> None:
        super().__init__(f"Response body could not be decoded (Content-Encoding: {encoding or 'unknown'})")
        self.encoding = encoding
