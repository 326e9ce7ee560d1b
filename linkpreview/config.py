"""Centralised settings for the link preview service.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

The scraper core never reads these values itself: callers turn them into a
:class:`~linkpreview.scraper.models.FetchLimits` and pass it in explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from linkpreview.scraper.models import FetchLimits

# Load .env from the project root (one level up from the package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    preview_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PREVIEW_TIMEOUT", "5.0"))
    )
    preview_max_bytes: int = field(
        default_factory=lambda: int(os.environ.get("PREVIEW_MAX_BYTES", str(512 * 1024)))
    )
    preview_max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("PREVIEW_MAX_REDIRECTS", "3"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "PREVIEW_USER_AGENT",
            "Mozilla/5.0 (compatible; LinkPreview-Bot/1.0)",
        )
    )

    # ------------------------------------------------------------------
    # HTTP front end
    # ------------------------------------------------------------------
    rate_limit_requests: int = field(
        default_factory=lambda: int(os.environ.get("RATE_LIMIT_REQUESTS", "10"))
    )
    rate_limit_window: float = field(
        default_factory=lambda: float(os.environ.get("RATE_LIMIT_WINDOW", "60"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    def fetch_limits(self) -> FetchLimits:
        """Bundle the fetcher bounds into the value the scraper core consumes."""
        return FetchLimits(
            max_bytes=self.preview_max_bytes,
            max_redirects=self.preview_max_redirects,
            timeout=self.preview_timeout,
            user_agent=self.user_agent,
        )


# Module-level singleton — import this everywhere:
#   from linkpreview.config import settings
settings = Settings()
