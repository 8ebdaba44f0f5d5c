"""Identity-rotating page fetch.

Each identity in ``settings.user_agents`` is tried in order until one returns
a page with extractable text.  A short pause separates attempts so the target
site does not see a burst of requests from what looks like one origin.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from siteqa.config import Settings, settings
from siteqa.scraper.extractor import extract_text
from siteqa.scraper.fetcher import fetch_page

Sleep = Callable[[float], Awaitable[None]]


async def fetch_page_text_resilient(
    url: str,
    config: Settings | None = None,
    sleep: Sleep = asyncio.sleep,
) -> str:
    """Return the extracted text of *url*, or ``""`` if every identity fails.

    Args:
        url: Absolute URL of the page to fetch.
        config: Settings overrides; defaults to the module singleton.
        sleep: Awaitable delay function, injectable so tests skip real waits.
    """
    cfg = config or settings
    total = len(cfg.user_agents)
    for attempt, identity in enumerate(cfg.user_agents, start=1):
        page = await fetch_page(url, identity, config=cfg)
        text = extract_text(page.body) if page is not None else ""
        if text:
            if attempt > 1:
                print(f"[ROTATE] ✓ {url} succeeded with identity #{attempt}")
            return text

        print(f"[ROTATE] identity {attempt}/{total} got no content from {url}")
        # Pause only between attempts, not after the last one.
        if attempt < total:
            await sleep(cfg.identity_delay)

    print(f"[ROTATE] all identities exhausted for {url}")
    return ""
