"""siteqa CLI — entry-point for the site-grounded Q&A pipeline.

Usage:
    python cli/main.py --help

Commands:
    ask     → full pipeline: harvest, filter, fetch, generate
    links   → inspect the links harvested from a seed page
    scrape  → extract the text of a single page with identity rotation
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from siteqa.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Optional

import typer

app = typer.Typer(
    name="siteqa",
    help="Answer questions grounded in a website's own pages.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Ask
# ---------------------------------------------------------------------------
@app.command("ask")
def ask(
    url: str = typer.Option(..., help="Seed page whose links are searched."),
    query: str = typer.Option(..., help="Question to answer."),
) -> None:
    """Answer QUERY using relevant pages linked from URL."""
    from siteqa.orchestrator import run

    typer.echo(f"[ask] Seed {url!r}")
    result = run(url, query)
    if result is None:
        typer.echo("[ask] The query could not be completed.")
        raise typer.Exit(1)

    typer.echo("")
    typer.echo(f"[ask] Path   : {result.path}")
    typer.echo(f"[ask] Model  : {result.model_id}")
    typer.echo(f"[ask] Context: {len(result.grounding)} chars")


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------
@app.command("links")
def links(
    url: str = typer.Option(..., help="Seed page to harvest."),
    query: Optional[str] = typer.Option(
        None, help="Only show links relevant to this query."
    ),
) -> None:
    """List the links harvested from URL, optionally filtered by QUERY."""
    from siteqa.grounding.relevance import derive_keywords, filter_relevant
    from siteqa.scraper.links import harvest_links

    candidates = asyncio.run(harvest_links(url))
    if query is not None:
        candidates = filter_relevant(candidates, derive_keywords(query))

    if not candidates:
        typer.echo(f"[links] No links found for {url!r}.")
        return
    for link in candidates:
        typer.echo(f"  {link.url}  {link.link_text!r}")


# ---------------------------------------------------------------------------
# Scrape
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="URL to scrape."),
) -> None:
    """Fetch URL (rotating identities) and print its extracted text."""
    from siteqa.scraper.rotation import fetch_page_text_resilient

    typer.echo(f"[scrape] Fetching {url!r} …")
    text = asyncio.run(fetch_page_text_resilient(url))
    if not text:
        typer.echo("[scrape] No content extracted.")
        raise typer.Exit(1)

    typer.echo(f"[scrape] Words  : {len(text.split())}")
    typer.echo("")
    typer.echo(text)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
