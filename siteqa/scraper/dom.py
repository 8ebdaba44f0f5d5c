"""Narrow HTML query interface used by the harvester and the extractor.

The pipeline only ever needs to select elements by tag, read an attribute,
and read the text of an element or of its immediate parent.  Those four
capabilities are captured by :class:`HtmlDocument` / :class:`HtmlElement`,
so tests can swap in a fake document and the parser can be replaced without
touching the callers.  :func:`parse_html` returns the BeautifulSoup-backed
implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bs4 import BeautifulSoup
from bs4.element import Tag


# ---------------------------------------------------------------------------
# Abstract interface
# ---------------------------------------------------------------------------

class HtmlElement(ABC):
    """A single element of a parsed document."""

    @abstractmethod
    def attr(self, name: str) -> str | None:
        """Return attribute *name*, or ``None`` when it is absent."""

    @abstractmethod
    def text(self) -> str:
        """Return the concatenated text of the element and its descendants."""

    @abstractmethod
    def parent_text(self) -> str:
        """Return the text of the element's immediate parent container."""


class HtmlDocument(ABC):
    """A parsed HTML page."""

    @abstractmethod
    def select(self, *tags: str) -> list[HtmlElement]:
        """Return every element whose tag is one of *tags*, in document order."""


# ---------------------------------------------------------------------------
# BeautifulSoup implementation
# ---------------------------------------------------------------------------

class SoupElement(HtmlElement):
    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def attr(self, name: str) -> str | None:
        value = self._tag.get(name)
        if isinstance(value, list):
            # Multi-valued attributes (e.g. ``class``) come back as lists.
            return " ".join(value)
        return value

    def text(self) -> str:
        return self._tag.get_text()

    def parent_text(self) -> str:
        parent = self._tag.parent
        if parent is None:
            return ""
        return parent.get_text()


class SoupDocument(HtmlDocument):
    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    def select(self, *tags: str) -> list[HtmlElement]:
        # find_all with a list walks the tree once, so mixed tags keep
        # their document order.
        return [SoupElement(tag) for tag in self._soup.find_all(list(tags))]


def parse_html(html: str) -> HtmlDocument:
    """Parse *html* with the stdlib-backed ``html.parser`` tree builder."""
    return SoupDocument(BeautifulSoup(html, "html.parser"))
