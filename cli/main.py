"""Link preview CLI — run the preview pipeline from a terminal.

Usage:
    python cli/main.py --help

Commands:
    preview    → fetch a URL (or read an HTML file) and print its preview
    normalize  → print the de-duplication key of a URL
    classify   → report whether a host is public or private
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from linkpreview.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import Optional

import typer

from cli.rendering import render_preview
from linkpreview.config import settings
from linkpreview.scraper import HostClass, PreviewError, PreviewRequest, classify_host, normalize_url
from linkpreview.service import build_preview

app = typer.Typer(
    name="linkpreview",
    help="Link preview CLI.",
    no_args_is_help=True,
)


@app.command("preview")
def preview(
    url: Optional[str] = typer.Argument(None, help="URL to preview."),
    html_file: Optional[Path] = typer.Option(
        None, "--html-file", exists=True, dir_okay=False, help="Read raw HTML from a file instead."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw preview object."),
) -> None:
    """Fetch a page (or parse a local HTML file) and print its preview fields."""
    raw_html = html_file.read_text(encoding="utf-8", errors="replace") if html_file else None
    request = PreviewRequest(url=url, raw_html=raw_html)

    try:
        result = asyncio.run(build_preview(request, settings.fetch_limits()))
    except PreviewError as exc:
        typer.echo(f"[preview] Error: {exc.message}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        typer.echo(render_preview(result))


@app.command("normalize")
def normalize(url: str = typer.Argument(..., help="URL to canonicalize.")) -> None:
    """Print the de-duplication key of *url*."""
    typer.echo(normalize_url(url))


@app.command("classify")
def classify(host: str = typer.Argument(..., help="Hostname or IP literal.")) -> None:
    """Print ``public`` or ``private``; exits 1 for private destinations."""
    host_class = asyncio.run(classify_host(host))
    typer.echo(host_class.value)
    if host_class is HostClass.PRIVATE:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
