"""Exceptions raised inside the pipeline.

None of these escape the public operations: the generation client turns
:class:`BackendError` into its apology string after the retry budget is spent.
"""

from __future__ import annotations


class BackendError(RuntimeError):
    """The generative backend failed or returned no usable text."""

    def __init__(self, model_id: str, detail: str) -> None:
        super().__init__(f"{model_id}: {detail}")
        self.model_id = model_id
        self.detail = detail
