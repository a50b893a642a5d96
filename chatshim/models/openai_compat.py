"""
OpenAI-compatible adapter.
Works with OpenAI, Ollama (http://localhost:11434/v1) and any compatible endpoint.
Compatible with openai SDK v1.x / v2.x.
"""
from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Optional

from openai import AsyncOpenAI

from chatshim.models.base import BaseModelAdapter

logger = logging.getLogger(__name__)


class OpenAICompatAdapter(BaseModelAdapter):
    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        _client: Any = None,
    ):
        self.model_name = model_name
        self._api_key   = api_key
        self._base_url  = base_url
        self._client    = _client

    @property
    def client(self) -> Any:
        # Built on first use so a missing key fails the call, not the factory.
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    async def stream_text(
        self,
        messages: list[dict],
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[str]:
        kwargs: dict = {
            "model":    self.model_name,
            "messages": messages,
            "stream":   True,
        }
        if max_tokens:
            kwargs["max_tokens"] = max_tokens

        stream = await self.client.chat.completions.create(**kwargs)

        async for chunk in stream:
            if not chunk.choices:
                continue

            delta = chunk.choices[0].delta
            text = (delta.content if delta is not None else None) or ""
            if text:
                yield text

        logger.debug("Stream from %s finished", self.model_name)
