"""Link harvesting: every outbound anchor of a seed page plus its context."""

from __future__ import annotations

from typing import Callable
from urllib.parse import urljoin

from siteqa.config import Settings, settings
from siteqa.scraper.dom import HtmlDocument, parse_html
from siteqa.scraper.fetcher import fetch_page
from siteqa.scraper.models import LinkCandidate

_SKIPPED_PREFIXES = ("#", "mailto:", "tel:")


def _is_followable(href: str | None) -> bool:
    """Return ``True`` unless *href* is missing, a fragment, or a mail/phone link."""
    return bool(href) and not href.startswith(_SKIPPED_PREFIXES)


def extract_links(
    html: str,
    page_url: str,
    parser: Callable[[str], HtmlDocument] = parse_html,
) -> list[LinkCandidate]:
    """Return a :class:`LinkCandidate` for every usable ``<a>`` in *html*.

    Hrefs are resolved against *page_url*.  Anchors whose text is empty after
    trimming are dropped.  Candidates come back in document order and are not
    deduplicated.
    """
    document = parser(html)
    candidates: list[LinkCandidate] = []
    for anchor in document.select("a"):
        href = anchor.attr("href")
        if not _is_followable(href):
            continue
        link_text = anchor.text().lower().strip()
        if not link_text:
            continue
        try:
            url = urljoin(page_url, href)
        except ValueError as exc:
            print(f"[HARVEST] ✗ Skipping unresolvable href {href!r:.80}: {exc}")
            continue
        candidates.append(
            LinkCandidate(
                link_text=link_text,
                surrounding_text=anchor.parent_text().lower().strip(),
                url=url,
            )
        )
    return candidates


async def harvest_links(
    page_url: str,
    config: Settings | None = None,
) -> list[LinkCandidate]:
    """Fetch *page_url* with the first identity and harvest its links.

    A failed fetch yields an empty list.
    """
    cfg = config or settings
    page = await fetch_page(page_url, cfg.primary_identity, config=cfg)
    if page is None:
        print(f"[HARVEST] No HTML content fetched from {page_url}")
        return []

    candidates = extract_links(page.body, page_url)
    print(f"[HARVEST] {len(candidates)} link(s) with surrounding text on {page_url}")
    for link in candidates:
        print(f"[HARVEST]   {link.link_text!r:.60} ← {link.surrounding_text!r:.100}")
    return candidates
