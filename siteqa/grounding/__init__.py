"""Grounding package — keyword relevance and grounding document assembly."""

from siteqa.grounding.assembler import build_grounding_document
from siteqa.grounding.relevance import derive_keywords, filter_relevant, normalise_keyword

__all__ = [
    "build_grounding_document",
    "derive_keywords",
    "filter_relevant",
    "normalise_keyword",
]
