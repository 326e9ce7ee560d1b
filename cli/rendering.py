"""Plain-text rendering of preview results for the CLI."""

from __future__ import annotations

from linkpreview.scraper.models import PreviewResult
from linkpreview.scraper.normalize import extract_domain

_LABEL_WIDTH = 9


def _line(label: str, value: str) -> str:
    return f"{label:<{_LABEL_WIDTH}}: {value}"


def render_preview(result: PreviewResult) -> str:
    """Render *result* as aligned ``label: value`` lines.

    Missing fields are shown as ``(none)``; a price is joined with its
    currency when one is known.
    """
    price = result.price or "(none)"
    if result.price and result.currency:
        price = f"{result.price} {result.currency}"

    lines = [
        _line("Title", result.title or "(none)"),
        _line("Image", result.image or "(none)"),
        _line("Price", price),
        _line("Site", result.site_name or "(none)"),
    ]
    if result.source_url:
        lines.append(_line("Source", f"{result.source_url} ({extract_domain(result.source_url)})"))
    return "\n".join(lines)
