"""Test doubles for chatshim.

Useful for anyone integrating chatshim who wants to test their code without
making real LLM API calls.
"""
from __future__ import annotations

from typing import AsyncIterator, Iterable, Optional

from chatshim.models.base import BaseModelAdapter


class FakeModelAdapter(BaseModelAdapter):
    """Streaming adapter that replays fixed fragments, or raises `error`.

    Example::

        from chatshim import create_claude_service
        from chatshim.testing import FakeModelAdapter

        service = create_claude_service(adapter=FakeModelAdapter(["Hel", "lo"]))
    """

    def __init__(
        self,
        fragments: Iterable[str] = (),
        error: Optional[BaseException] = None,
        model_name: str = "fake-model",
    ) -> None:
        self.model_name = model_name
        self.fragments = list(fragments)
        self.error = error
        self.calls: list[dict] = []

    async def stream_text(
        self,
        messages: list[dict],
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[str]:
        self.calls.append({"messages": messages, "max_tokens": max_tokens})
        for fragment in self.fragments:
            yield fragment
        if self.error is not None:
            raise self.error
