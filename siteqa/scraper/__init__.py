"""Scraper package — fetch, link harvesting & content extraction."""

from siteqa.scraper.extractor import extract_text
from siteqa.scraper.fetcher import fetch_page
from siteqa.scraper.links import extract_links, harvest_links
from siteqa.scraper.models import FetchResult, LinkCandidate
from siteqa.scraper.rotation import fetch_page_text_resilient

__all__ = [
    "fetch_page",
    "extract_links",
    "harvest_links",
    "extract_text",
    "fetch_page_text_resilient",
    "FetchResult",
    "LinkCandidate",
]
