"""Tests for the resilient generation client.

Mocking strategy
----------------
* LLM calls  — an ``llm_factory`` returns a ``MagicMock`` whose ``ainvoke``
  is an ``AsyncMock`` yielding fake ``AIMessage``-like objects.
* Backoff    — ``sleep`` is an ``AsyncMock`` so no test waits.
* Providers  — ``_get_llm`` is checked against patched LangChain classes.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from siteqa.config import Settings
from siteqa.llm.client import (
    APOLOGY,
    GenerationClient,
    _get_llm,
    fallback_client,
    generate,
    primary_client,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fake_ai_message(content) -> SimpleNamespace:
    """Minimal stand-in for a LangChain ``AIMessage``."""
    return SimpleNamespace(content=content)


def _factory(*outcomes):
    """Return ``(factory, llm)`` where ``llm.ainvoke`` yields *outcomes* in turn."""
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=list(outcomes))
    factory = MagicMock(return_value=llm)
    return factory, llm


@pytest.fixture()
def cfg() -> Settings:
    return Settings(
        max_retries=3,
        retry_backoff=2.0,
        primary_model="primary-model",
        fallback_model="fallback-model",
        llm_provider="google",
    )


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

class TestGenerate:
    async def test_success_returns_text(self, cfg: Settings) -> None:
        factory, llm = _factory(_fake_ai_message("Answer."))
        sleep = AsyncMock()

        text = await generate("prompt", "primary-model", config=cfg, sleep=sleep, llm_factory=factory)

        assert text == "Answer."
        factory.assert_called_once_with("primary-model")
        llm.ainvoke.assert_awaited_once_with("prompt")
        sleep.assert_not_awaited()

    async def test_retries_then_succeeds(self, cfg: Settings) -> None:
        factory, llm = _factory(
            RuntimeError("quota"),
            RuntimeError("quota"),
            _fake_ai_message("Finally."),
        )
        sleep = AsyncMock()

        text = await generate("prompt", "primary-model", config=cfg, sleep=sleep, llm_factory=factory)

        assert text == "Finally."
        assert llm.ainvoke.await_count == 3
        assert sleep.await_count == 2
        sleep.assert_awaited_with(2.0)

    async def test_exhausted_retries_return_apology(self, cfg: Settings) -> None:
        factory, llm = _factory(*[RuntimeError("down")] * 4)
        sleep = AsyncMock()

        text = await generate("prompt", "primary-model", config=cfg, sleep=sleep, llm_factory=factory)

        assert text == APOLOGY
        # One initial attempt plus max_retries retries.
        assert llm.ainvoke.await_count == 4
        assert sleep.await_count == 3

    async def test_zero_retries_with_failing_backend(self, cfg: Settings) -> None:
        factory, llm = _factory(RuntimeError("down"))
        sleep = AsyncMock()

        text = await generate(
            "prompt", "primary-model", 0, config=cfg, sleep=sleep, llm_factory=factory
        )

        assert text == "I'm sorry, but I'm currently unable to assist you. Please try again later."
        assert llm.ainvoke.await_count == 1
        sleep.assert_not_awaited()

    async def test_negative_retries_treated_as_zero(self, cfg: Settings) -> None:
        factory, llm = _factory(RuntimeError("down"))
        text = await generate(
            "prompt", "m", -3, config=cfg, sleep=AsyncMock(), llm_factory=factory
        )
        assert text == APOLOGY
        assert llm.ainvoke.await_count == 1

    async def test_empty_response_is_a_failure(self, cfg: Settings) -> None:
        factory, llm = _factory(_fake_ai_message("   "), _fake_ai_message("Real."))
        text = await generate(
            "prompt", "m", 1, config=cfg, sleep=AsyncMock(), llm_factory=factory
        )
        assert text == "Real."

    async def test_factory_errors_are_retried(self, cfg: Settings) -> None:
        llm = MagicMock()
        llm.ainvoke = AsyncMock(return_value=_fake_ai_message("ok"))
        factory = MagicMock(side_effect=[EnvironmentError("no key"), llm])

        text = await generate(
            "prompt", "m", 1, config=cfg, sleep=AsyncMock(), llm_factory=factory
        )
        assert text == "ok"

    async def test_content_block_lists_are_joined(self, cfg: Settings) -> None:
        factory, _ = _factory(_fake_ai_message([{"type": "text", "text": "Hel"}, "lo"]))
        text = await generate("prompt", "m", config=cfg, sleep=AsyncMock(), llm_factory=factory)
        assert text == "Hello"

    async def test_uses_same_model_on_every_retry(self, cfg: Settings) -> None:
        factory, _ = _factory(RuntimeError("x"), RuntimeError("x"), _fake_ai_message("ok"))
        await generate("prompt", "fallback-model", config=cfg, sleep=AsyncMock(), llm_factory=factory)
        assert {c.args[0] for c in factory.call_args_list} == {"fallback-model"}


# ---------------------------------------------------------------------------
# GenerationClient & instantiations
# ---------------------------------------------------------------------------

class TestGenerationClient:
    def test_primary_and_fallback_models(self, cfg: Settings) -> None:
        assert primary_client(cfg).model_id == "primary-model"
        assert fallback_client(cfg).model_id == "fallback-model"

    async def test_clients_share_the_failure_policy(self, cfg: Settings) -> None:
        for make in (primary_client, fallback_client):
            factory, llm = _factory(*[RuntimeError("down")] * 4)
            client = make(cfg, sleep=AsyncMock(), llm_factory=factory)
            assert await client.generate("prompt") == APOLOGY
            assert llm.ainvoke.await_count == 4

    async def test_explicit_retry_budget(self, cfg: Settings) -> None:
        factory, llm = _factory(RuntimeError("a"), RuntimeError("b"))
        client = GenerationClient("m", config=cfg, sleep=AsyncMock(), llm_factory=factory)
        assert await client.generate("prompt", retries_remaining=1) == APOLOGY
        assert llm.ainvoke.await_count == 2


# ---------------------------------------------------------------------------
# _get_llm provider selection
# ---------------------------------------------------------------------------

class TestGetLlm:
    def test_google_is_default(self, cfg: Settings) -> None:
        with patch("langchain_google_genai.ChatGoogleGenerativeAI") as chat_cls:
            _get_llm("gemini-x", cfg)
        chat_cls.assert_called_once_with(model="gemini-x", temperature=0)

    def test_ollama_provider(self, cfg: Settings) -> None:
        cfg.llm_provider = "ollama"
        cfg.ollama_base_url = "http://ollama:11434"
        with patch("langchain_ollama.ChatOllama") as chat_cls:
            _get_llm("llama3", cfg)
        chat_cls.assert_called_once_with(
            model="llama3", base_url="http://ollama:11434", temperature=0
        )

    def test_openai_provider(self, cfg: Settings) -> None:
        cfg.llm_provider = "openai"
        with patch("langchain_openai.ChatOpenAI") as chat_cls:
            _get_llm("gpt-4o-mini", cfg)
        chat_cls.assert_called_once_with(model="gpt-4o-mini", temperature=0)
