"""Top-level query flow: keywords → grounding → prompt → answer.

``answer_query`` runs one query through the pipeline::

    start → harvesting → grounded | fallback → done

A non-empty grounding document selects the grounded path and the primary
model; an empty one selects the fallback path and the fallback model.  Each
path gets the full retry budget.  ``run`` is the process boundary: it drives
the coroutine, prints the answer, and reports any unexpected exception
instead of letting it escape.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Literal

from siteqa.config import Settings, settings
from siteqa.grounding.assembler import build_grounding_document
from siteqa.grounding.relevance import derive_keywords
from siteqa.llm.client import GenerationClient, LlmFactory, fallback_client, primary_client
from siteqa.prompts import build_fallback_prompt, build_grounded_prompt, site_name
from siteqa.scraper.rotation import Sleep

AnswerPath = Literal["grounded", "fallback"]


@dataclass
class QueryResult:
    """Everything observable about one finished query."""

    query: str
    answer: str
    path: AnswerPath
    model_id: str
    prompt: str
    grounding: str = ""
    keywords: list[str] = field(default_factory=list)

    @property
    def grounded(self) -> bool:
        return self.path == "grounded"


async def answer_query(
    seed_url: str,
    query: str,
    config: Settings | None = None,
    sleep: Sleep = asyncio.sleep,
    llm_factory: LlmFactory | None = None,
) -> QueryResult:
    """Answer *query* using content linked from *seed_url* when possible.

    Args:
        seed_url: Page whose outbound links are harvested (one hop only).
        query: Free-text user question.
        config: Settings overrides; defaults to the module singleton.
        sleep: Awaitable delay shared by the fetch pacing and LLM backoff.
        llm_factory: Optional chat-model factory passed to the clients.

    Returns:
        A :class:`QueryResult`; ``answer`` is the model text or the apology.
    """
    cfg = config or settings

    keywords = derive_keywords(query)
    print(f"[ORCHESTRATOR] Query: {query!r}")

    grounding = await build_grounding_document(seed_url, keywords, config=cfg, sleep=sleep)

    client: GenerationClient
    path: AnswerPath
    if grounding:
        path = "grounded"
        prompt = build_grounded_prompt(site_name(seed_url), grounding, query)
        client = primary_client(cfg, sleep=sleep, llm_factory=llm_factory)
        print(f"[ORCHESTRATOR] Grounded on {len(grounding)} chars; asking {client.model_id}.")
    else:
        path = "fallback"
        prompt = build_fallback_prompt(query)
        client = fallback_client(cfg, sleep=sleep, llm_factory=llm_factory)
        print(
            "[ORCHESTRATOR] Failed to fetch or extract content from the website. "
            f"Falling back to {client.model_id} without grounding."
        )

    answer = await client.generate(prompt)
    return QueryResult(
        query=query,
        answer=answer,
        path=path,
        model_id=client.model_id,
        prompt=prompt,
        grounding=grounding,
        keywords=keywords,
    )


def run(
    seed_url: str,
    query: str,
    config: Settings | None = None,
) -> QueryResult | None:
    """Answer *query* and print the result; never raises.

    Returns the :class:`QueryResult`, or ``None`` when the run failed.
    """
    try:
        result = asyncio.run(answer_query(seed_url, query, config=config))
        print(result.answer)
        return result
    except Exception as exc:  # noqa: BLE001
        print(f"[ORCHESTRATOR] ✗ An error occurred while running the query: {exc}")
        return None
