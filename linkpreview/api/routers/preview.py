"""Preview endpoint.

Routes
------
POST /preview    Body: {"url": "https://..."} or {"raw_html": "<html>..."}
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from linkpreview.api.ratelimit import enforce_rate_limit
from linkpreview.scraper.models import PreviewRequest
from linkpreview.service import build_preview

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class PreviewRequestBody(BaseModel):
    url: Optional[str] = None
    raw_html: Optional[str] = None


class PreviewResponse(BaseModel):
    title: Optional[str] = None
    image: Optional[str] = None
    price: Optional[str] = None
    currency: Optional[str] = None
    siteName: Optional[str] = None
    sourceUrl: Optional[str] = None


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=PreviewResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_rate_limit)],
)
async def preview(body: PreviewRequestBody, request: Request) -> dict[str, Any]:
    """Return link-preview metadata for a URL or a raw HTML document.

    ``raw_html`` wins when both are given.  Failures surface as
    ``{"error": ...}`` via the handlers registered in :func:`create_app`.
    """
    settings = request.app.state.settings
    result = await build_preview(
        PreviewRequest(url=body.url, raw_html=body.raw_html),
        settings.fetch_limits(),
    )
    return result.to_dict()
