"""Bounded HTTP fetcher with manual, re-validated redirect following.

A fetch is a small loop over hops.  Each hop is requested with redirects
disabled; a 3xx with ``Location`` bumps the hop counter, resolves the new URL
against the current one and runs it back through
:func:`~linkpreview.scraper.validator.validate_url` before it is contacted.
The body of the final hop is streamed and abandoned the moment it would pass
the byte cap.  One deadline covers every hop, DNS lookups included.
"""

from __future__ import annotations

import asyncio
import logging
import zlib
from typing import Optional
from urllib.parse import urljoin

import httpx

from linkpreview.scraper.errors import (
    ContentTooLargeError,
    FetchConnectionError,
    FetchFailedError,
    FetchTimeoutError,
    TooManyRedirectsError,
    UndecodableContentError,
    UnsupportedContentTypeError,
)
from linkpreview.scraper.models import FetchLimits, FetchResult, ValidatedTarget
from linkpreview.scraper.validator import validate_url

logger = logging.getLogger(__name__)

_ACCEPT = "text/html,application/xhtml+xml;q=0.9,*/*;q=0.5"
_ACCEPT_ENCODING = "gzip, deflate"


def _declared_length(response: httpx.Response) -> Optional[int]:
    raw = response.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _decompressor(encoding: str):
    """Return a zlib decompressor for *encoding*, or ``None`` for identity."""
    if encoding in ("", "identity"):
        return None
    if encoding in ("gzip", "x-gzip", "deflate"):
        # 32 + MAX_WBITS accepts both gzip and zlib framing.
        return zlib.decompressobj(32 + zlib.MAX_WBITS)
    raise UndecodableContentError(encoding)


async def _read_capped(response: httpx.Response, max_bytes: int) -> bytes:
    """Accumulate the body of *response*, failing before the cap is crossed.

    Raw wire bytes and decoded bytes are both held to *max_bytes*.  Compressed
    chunks are inflated at most ``remaining + 1`` bytes at a time, so a small
    compressed chunk can never expand past the cap in memory.
    """
    declared = _declared_length(response)
    if declared is not None and declared > max_bytes:
        raise ContentTooLargeError(max_bytes)

    encoding = response.headers.get("content-encoding", "").strip().lower()
    decompressor = _decompressor(encoding)

    chunks: list[bytes] = []
    wire = 0
    received = 0

    def take(data: bytes) -> None:
        nonlocal received
        if received + len(data) > max_bytes:
            raise ContentTooLargeError(max_bytes)
        received += len(data)
        chunks.append(data)

    try:
        async for raw in response.aiter_raw():
            wire += len(raw)
            if wire > max_bytes:
                raise ContentTooLargeError(max_bytes)
            if decompressor is None:
                take(raw)
                continue
            pending = raw
            while pending:
                take(decompressor.decompress(pending, max_bytes - received + 1))
                pending = decompressor.unconsumed_tail
        if decompressor is not None:
            take(decompressor.flush())
    except zlib.error as exc:
        raise UndecodableContentError(encoding) from exc
    return b"".join(chunks)


async def _follow(
    client: httpx.AsyncClient,
    target: ValidatedTarget,
    limits: FetchLimits,
) -> FetchResult:
    current = target
    redirects = 0

    while True:
        logger.debug("Fetching %s (hop %d)", current.url, redirects)
        async with client.stream("GET", current.url) as response:
            location = response.headers.get("location")
            if 300 <= response.status_code < 400 and location:
                redirects += 1
                if redirects > limits.max_redirects:
                    raise TooManyRedirectsError(limits.max_redirects)
                next_url = urljoin(current.url, location)
                logger.info("Redirect %d: %s -> %s", redirects, current.url, next_url)
                current = await validate_url(next_url)
                continue

            if not response.is_success:
                raise FetchFailedError(response.status_code)

            content_type = response.headers.get("content-type", "")
            if "text/html" not in content_type.lower():
                raise UnsupportedContentTypeError(content_type)

            body = await _read_capped(response, limits.max_bytes)

        return FetchResult(
            html=body.decode("utf-8", errors="replace"),
            final_url=current.url,
            redirect_count=redirects,
        )


async def fetch_html(
    target: ValidatedTarget,
    limits: FetchLimits = FetchLimits(),
    client: Optional[httpx.AsyncClient] = None,
) -> FetchResult:
    """Fetch *target* and return the HTML of the final hop.

    A caller-supplied *client* must have redirect following disabled; it is
    left open.  Otherwise a short-lived client is created for this call.

    Raises:
        ValidationError: A redirect pointed at a disallowed destination.
        NetworkError: Timeout, connection failure, non-2xx status or too many
            redirects.
        ContentError: Non-HTML content type, body larger than the cap, or a
            body that cannot be decoded.
    """
    try:
        if client is not None:
            return await asyncio.wait_for(_follow(client, target, limits), timeout=limits.timeout)
        async with httpx.AsyncClient(
            headers={
                "User-Agent": limits.user_agent,
                "Accept": _ACCEPT,
                "Accept-Encoding": _ACCEPT_ENCODING,
            },
            timeout=limits.timeout,
            follow_redirects=False,
        ) as own_client:
            return await asyncio.wait_for(_follow(own_client, target, limits), timeout=limits.timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Fetch of %s exceeded %.1fs", target.url, limits.timeout)
        raise FetchTimeoutError(limits.timeout) from exc
    except httpx.TimeoutException as exc:
        logger.warning("Fetch of %s timed out: %s", target.url, exc)
        raise FetchTimeoutError(limits.timeout) from exc
    except httpx.TransportError as exc:
        logger.warning("Fetch of %s failed: %s", target.url, exc)
        raise FetchConnectionError(str(exc)) from exc
    except httpx.DecodingError as exc:
        logger.warning("Fetch of %s returned an undecodable body: %s", target.url, exc)
        raise UndecodableContentError("") from exc
