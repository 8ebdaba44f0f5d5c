"""Grounding document assembly: seed page → relevant links → page texts."""

from __future__ import annotations

import asyncio
from typing import Sequence

from siteqa.config import Settings, settings
from siteqa.grounding.relevance import filter_relevant
from siteqa.scraper.links import harvest_links
from siteqa.scraper.rotation import Sleep, fetch_page_text_resilient


async def build_grounding_document(
    seed_url: str,
    keywords: Sequence[str],
    config: Settings | None = None,
    sleep: Sleep = asyncio.sleep,
) -> str:
    """Collect the text of every seed-page link relevant to *keywords*.

    Pages are fetched strictly one after another.  Texts are joined with a
    newline.  An empty string means no grounding is available, either because
    nothing was harvested, nothing matched, or every page fetch came back
    empty.
    """
    cfg = config or settings

    candidates = await harvest_links(seed_url, config=cfg)
    if not candidates:
        print("[GROUNDING] No links with surrounding text found on the main page.")
        return ""

    print(f"[GROUNDING] User keywords: {list(keywords)}")
    relevant = filter_relevant(candidates, keywords, config=cfg)
    if not relevant:
        print("[GROUNDING] No relevant links found matching user keywords.")
        return ""

    print(f"[GROUNDING] {len(relevant)} relevant link(s):")
    for link in relevant:
        print(f"[GROUNDING]   {link.link_text!r:.60} → {link.url}")

    contents: list[str] = []
    for link in relevant:
        print(f"[GROUNDING] Fetching content from relevant link: {link.url}")
        text = await fetch_page_text_resilient(link.url, config=cfg, sleep=sleep)
        if text:
            contents.append(text)

    print(f"[GROUNDING] Assembled {len(contents)} page(s) of grounding text.")
    return "\n".join(contents)
