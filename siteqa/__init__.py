"""siteqa — answer questions grounded in a website's own pages."""

from siteqa.orchestrator import QueryResult, answer_query, run

__all__ = ["QueryResult", "answer_query", "run"]
