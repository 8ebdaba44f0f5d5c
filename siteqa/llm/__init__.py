"""LLM package — resilient generation client."""

from siteqa.llm.client import (
    APOLOGY,
    GenerationClient,
    fallback_client,
    generate,
    primary_client,
)

__all__ = ["APOLOGY", "GenerationClient", "generate", "primary_client", "fallback_client"]
