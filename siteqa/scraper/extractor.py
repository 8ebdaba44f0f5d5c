"""Content extraction: flattens a page's structural tags into plain text."""

from __future__ import annotations

from typing import Callable

from siteqa.scraper.dom import HtmlDocument, parse_html

CONTENT_TAGS = ("section", "p", "h1", "h2", "h3", "h4", "h5", "h6")


def extract_text(
    html: str,
    parser: Callable[[str], HtmlDocument] = parse_html,
) -> str:
    """Return the text of every content tag in *html*, one per line.

    Elements are visited in document order, so text nested inside a
    ``<section>`` appears both as part of the section and on its own.  Returns
    an empty string when the page has no matching elements or cannot be
    parsed.
    """
    if not html:
        return ""
    try:
        document = parser(html)
        parts = [element.text() + "\n" for element in document.select(*CONTENT_TAGS)]
    except Exception as exc:  # noqa: BLE001
        print(f"[EXTRACT] ✗ Could not parse page: {exc!r:.120}")
        return ""
    return "".join(parts).strip()
