"""Keyword derivation and lexical relevance filtering of harvested links.

Relevance is plain substring containment of a keyword in a link's
surrounding text.  It is deliberately loose: ``"art"`` matches ``"start"``.
No scoring or re-ranking happens; the harvest order is kept.
"""

from __future__ import annotations

import re
from typing import Sequence

from siteqa.config import Settings, settings
from siteqa.scraper.models import LinkCandidate

_PUNCTUATION = re.compile(r"[^\w\s]")


def derive_keywords(query: str) -> list[str]:
    """Lowercase *query* and split it on whitespace.

    No stemming and no stop-word removal: ``"How does X help?"`` becomes
    ``["how", "does", "x", "help?"]``.
    """
    return query.lower().split()


def normalise_keyword(keyword: str) -> str:
    """Lowercase *keyword* and strip everything but word characters and spaces."""
    return _PUNCTUATION.sub("", keyword.lower())


def filter_relevant(
    candidates: Sequence[LinkCandidate],
    keywords: Sequence[str],
    max_links: int | None = None,
    config: Settings | None = None,
) -> list[LinkCandidate]:
    """Return the candidates whose surrounding text contains any keyword.

    Args:
        candidates: Harvested links, in document order.
        keywords: Query tokens; punctuation is stripped before matching, so
            a punctuation-only token matches every candidate.
        max_links: Cap on the result length.  Defaults to
            ``config.max_links``.
        config: Settings overrides; defaults to the module singleton.

    Returns:
        An order-preserving subsequence of *candidates*, at most *max_links*
        long.
    """
    cfg = config or settings
    limit = cfg.max_links if max_links is None else max_links
    # A keyword that is all punctuation normalises to "" and matches everything.
    needles = [normalise_keyword(k) for k in keywords]

    relevant: list[LinkCandidate] = []
    for link in candidates:
        if len(relevant) >= limit:
            break
        if any(needle in link.surrounding_text for needle in needles):
            relevant.append(link)
    return relevant
