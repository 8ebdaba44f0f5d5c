"""Centralised settings for siteqa.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

Every pipeline component takes an optional ``config`` argument; when omitted
it falls back to the module-level ``settings`` singleton.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:104.0) Gecko/20100101 Firefox/104.0",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/91.0.4472.124 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/91.0.4472.124 Safari/537.36 Edg/91.0.864.64",
]


def _user_agents_from_env() -> list[str]:
    """Parse ``SITEQA_USER_AGENTS`` (``|``-separated) or return the defaults."""
    raw = os.environ.get("SITEQA_USER_AGENTS", "")
    agents = [ua.strip() for ua in raw.split("|") if ua.strip()]
    return agents or list(DEFAULT_USER_AGENTS)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Scraper
    # ------------------------------------------------------------------
    user_agents: list[str] = field(default_factory=_user_agents_from_env)
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    identity_delay: float = field(
        default_factory=lambda: float(os.environ.get("IDENTITY_DELAY", "0.5"))
    )

    # ------------------------------------------------------------------
    # Relevance filter
    # ------------------------------------------------------------------
    max_links: int = field(
        default_factory=lambda: int(os.environ.get("MAX_LINKS", "5"))
    )

    # ------------------------------------------------------------------
    # Chat / generation model
    # ------------------------------------------------------------------
    llm_provider: str = field(
        default_factory=lambda: os.environ.get("LLM_PROVIDER", "google")
    )
    primary_model: str = field(
        default_factory=lambda: os.environ.get("PRIMARY_MODEL", "gemini-1.5-pro")
    )
    fallback_model: str = field(
        default_factory=lambda: os.environ.get("FALLBACK_MODEL", "gemini-1.5-flash")
    )
    ollama_base_url: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_BASE_URL", "http://localhost:11434")
    )
    max_retries: int = field(
        default_factory=lambda: int(os.environ.get("MAX_RETRIES", "3"))
    )
    retry_backoff: float = field(
        default_factory=lambda: float(os.environ.get("RETRY_BACKOFF", "2.0"))
    )

    def __post_init__(self) -> None:
        if not self.user_agents:
            raise ValueError("user_agents must contain at least one identity")

    @property
    def primary_identity(self) -> str:
        """The user-agent used for the seed page fetch."""
        return self.user_agents[0]


# Module-level singleton — import this everywhere:
#   from siteqa.config import settings
settings = Settings()
