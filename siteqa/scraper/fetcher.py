"""Single-shot HTTP fetcher with a browser-like header profile."""

from __future__ import annotations

import httpx

from siteqa.config import Settings, settings
from siteqa.scraper.models import FetchResult

_HEADER_PROFILE = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


def build_headers(identity: str) -> dict[str, str]:
    """Return the fixed header profile with *identity* as the ``User-Agent``."""
    return {"User-Agent": identity, **_HEADER_PROFILE}


async def fetch_page(
    url: str,
    identity: str,
    config: Settings | None = None,
) -> FetchResult | None:
    """Fetch *url* once, presenting *identity* as the user-agent.

    Returns ``None`` on any transport or HTTP-status failure; the error is
    logged and never re-raised.  Retrying is left to the caller.
    """
    cfg = config or settings
    try:
        async with httpx.AsyncClient(
            headers=build_headers(identity),
            timeout=cfg.request_timeout,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        # ValueError covers IDNA failures on malformed hostnames.
        print(f"[FETCH] ✗ Error fetching content from {url}: {exc!r:.160}")
        return None

    return FetchResult(
        url=url,
        body=response.text,
        status_code=response.status_code,
        headers=dict(response.headers),
    )
