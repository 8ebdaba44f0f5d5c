"""Resilient text generation against a LangChain chat model.

Chat providers
--------------
``google`` (default)
    ``langchain_google_genai.ChatGoogleGenerativeAI``.  Requires
    ``GOOGLE_API_KEY`` to be set.

``ollama``
    ``langchain_ollama.ChatOllama`` against ``OLLAMA_BASE_URL``.

``openai``
    ``langchain_openai.ChatOpenAI``.  Requires ``OPENAI_API_KEY``.

Set ``LLM_PROVIDER`` in your ``.env`` to switch providers; ``PRIMARY_MODEL``
and ``FALLBACK_MODEL`` name the two models used by the orchestrator.

Retry policy
------------
Every failure (exception or empty answer) is retried against the same model
after a fixed ``settings.retry_backoff`` pause, up to ``settings.max_retries``
times.  When the budget is spent :data:`APOLOGY` is returned instead; nothing
is ever raised to the caller.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from siteqa.config import Settings, settings
from siteqa.errors import BackendError

APOLOGY = "I'm sorry, but I'm currently unable to assist you. Please try again later."

LlmFactory = Callable[[str], Any]
Sleep = Callable[[float], Awaitable[None]]


# ---------------------------------------------------------------------------
# LLM helper
# ---------------------------------------------------------------------------

def _get_llm(model_id: str, config: Settings | None = None) -> Any:
    """Return a LangChain chat model for *model_id* from ``settings``."""
    cfg = config or settings
    if cfg.llm_provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(model=model_id, temperature=0)

    if cfg.llm_provider == "ollama":
        from langchain_ollama import ChatOllama

        return ChatOllama(model=model_id, base_url=cfg.ollama_base_url, temperature=0)

    from langchain_google_genai import ChatGoogleGenerativeAI

    return ChatGoogleGenerativeAI(model=model_id, temperature=0)


def _response_text(response: Any) -> str:
    """Pull plain text out of an ``AIMessage``-like response."""
    content = response.content if hasattr(response, "content") else response
    if isinstance(content, list):
        # Some providers return a list of content blocks.
        parts = [
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        ]
        return "".join(parts)
    return str(content)


async def _invoke(llm_factory: LlmFactory, model_id: str, prompt: str) -> str:
    llm = llm_factory(model_id)
    response = await llm.ainvoke(prompt)
    text = _response_text(response)
    if not text.strip():
        raise BackendError(model_id, "empty response")
    return text


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def generate(
    prompt: str,
    model_id: str,
    retries_remaining: int | None = None,
    *,
    config: Settings | None = None,
    sleep: Sleep = asyncio.sleep,
    llm_factory: LlmFactory | None = None,
) -> str:
    """Send *prompt* to *model_id* and return the generated text.

    Args:
        prompt: Full prompt text.
        model_id: Backend model name (e.g. ``"gemini-1.5-pro"``).
        retries_remaining: Extra attempts allowed after the first failure.
            Defaults to ``config.max_retries``.
        config: Settings overrides; defaults to the module singleton.
        sleep: Awaitable delay used for the backoff between attempts.
        llm_factory: Builds a chat model from a model id.  Defaults to the
            provider selected by ``config.llm_provider``.

    Returns:
        The model's answer, or :data:`APOLOGY` once the retries are spent.
    """
    cfg = config or settings
    remaining = cfg.max_retries if retries_remaining is None else max(retries_remaining, 0)
    factory = llm_factory or (lambda name: _get_llm(name, cfg))
    attempt = 0

    while True:
        attempt += 1
        try:
            return await _invoke(factory, model_id, prompt)
        except Exception as exc:  # noqa: BLE001
            print(f"[LLM] ✗ {model_id} attempt {attempt} failed: {exc!r:.160}")
            if remaining <= 0:
                print(f"[LLM] {model_id} retries exhausted.")
                return APOLOGY
            print(
                f"[LLM] Retrying {model_id} in {cfg.retry_backoff:.0f}s "
                f"({remaining} retr{'y' if remaining == 1 else 'ies'} left) …"
            )
            await sleep(cfg.retry_backoff)
            remaining -= 1


class GenerationClient:
    """:func:`generate` bound to one model id and one retry policy.

    The primary and fallback clients differ only in ``model_id``.
    """

    def __init__(
        self,
        model_id: str,
        config: Settings | None = None,
        sleep: Sleep = asyncio.sleep,
        llm_factory: LlmFactory | None = None,
    ) -> None:
        self.model_id = model_id
        self._config = config or settings
        self._sleep = sleep
        self._llm_factory = llm_factory

    async def generate(self, prompt: str, retries_remaining: int | None = None) -> str:
        return await generate(
            prompt,
            self.model_id,
            retries_remaining,
            config=self._config,
            sleep=self._sleep,
            llm_factory=self._llm_factory,
        )


def primary_client(config: Settings | None = None, **kwargs: Any) -> GenerationClient:
    """Client for ``config.primary_model``, used when grounding text exists."""
    cfg = config or settings
    return GenerationClient(cfg.primary_model, config=cfg, **kwargs)


def fallback_client(config: Settings | None = None, **kwargs: Any) -> GenerationClient:
    """Client for ``config.fallback_model``, used for ungrounded prompts."""
    cfg = config or settings
    return GenerationClient(cfg.fallback_model, config=cfg, **kwargs)
