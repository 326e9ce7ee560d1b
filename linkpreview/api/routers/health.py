"""Liveness endpoints.

Routes
------
GET /          Service banner
GET /health    Status + timestamp
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/")
def root() -> dict[str, Any]:
    return {
        "message": "Link Preview API",
        "status": "running",
        "timestamp": _now(),
        "endpoints": ["/health", "/preview"],
    }


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "OK", "timestamp": _now()}
