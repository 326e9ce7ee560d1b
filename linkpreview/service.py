"""Preview pipeline: request in, :class:`PreviewResult` out.

``raw_html`` short-circuits validation and fetching entirely.  A ``url`` is
validated, fetched under the given limits, and its normalized final URL is
reported as ``sourceUrl``.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from linkpreview.scraper.errors import MissingInputError, PreviewError
from linkpreview.scraper.extractor import extract_preview
from linkpreview.scraper.fetcher import fetch_html
from linkpreview.scraper.models import FetchLimits, PreviewRequest, PreviewResult
from linkpreview.scraper.normalize import normalize_url
from linkpreview.scraper.validator import validate_url

logger = logging.getLogger(__name__)


async def build_preview(
    request: PreviewRequest,
    limits: FetchLimits = FetchLimits(),
    client: Optional[httpx.AsyncClient] = None,
) -> PreviewResult:
    """Run the full pipeline for *request*.

    Raises:
        PreviewError: Any validation, network or content failure.  Extraction
            itself never raises.
    """
    if request.raw_html:
        return extract_preview(request.raw_html)

    url = (request.url or "").strip()
    if not url:
        raise MissingInputError()

    try:
        target = await validate_url(url)
        fetched = await fetch_html(target, limits, client=client)
    except PreviewError as exc:
        logger.warning("Preview of %r rejected [%s]: %s", url, exc.reason, exc.message)
        raise

    logger.info(
        "Fetched %s (%d redirect(s), %d chars)",
        fetched.final_url, fetched.redirect_count, len(fetched.html),
    )
    return extract_preview(fetched.html, source_url=normalize_url(fetched.final_url))
