"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FetchResult:
    """A successful HTTP response for a single URL fetch.

    A failed fetch is represented by ``None`` rather than an instance.
    """

    url: str
    body: str
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LinkCandidate:
    """One outbound hyperlink found on the seed page.

    ``link_text`` and ``surrounding_text`` are lowercased and trimmed;
    ``url`` is always absolute.
    """

    link_text: str
    surrounding_text: str
    url: str
