"""Prompt templates for grounded and ungrounded answers."""

from __future__ import annotations

from urllib.parse import urlparse


def site_name(seed_url: str) -> str:
    """Return a readable site label for *seed_url* (``www.`` stripped)."""
    host = urlparse(seed_url).netloc or seed_url
    return host[4:] if host.startswith("www.") else host


def build_grounded_prompt(site: str, document: str, query: str) -> str:
    """Prompt that asks the model to answer *query* from the *site* content."""
    return (
        f"Based on the content from the {site} website, please provide "
        "information and assistance related to the user's query.\n\n"
        f"Website Content:\n{document}\n\n"
        f"User Query: {query}"
    )


def build_fallback_prompt(query: str) -> str:
    """Prompt used when no website content could be gathered."""
    return (
        "Based on available data, please provide information and assistance "
        "related to the user's query.\n\n"
        f"User Query: {query}"
    )
