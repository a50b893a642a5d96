"""
Abstract base model interface.
All adapters must implement `stream_text`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Literal, Optional

from pydantic import BaseModel as PydanticModel

END_TURN = "end_turn"


class ChatMessage(PydanticModel):
    role: Any = None  # "system" | "user" | "assistant", forwarded unchecked
    content: Any = None  # str or structured content (e.g. parsed JSON from storage)


class FinalMessage(PydanticModel):
    """Assembled assistant reply, produced once per streaming call."""
    role: Literal["assistant"] = "assistant"
    content: str = ""
    stop_reason: str = END_TURN


class BaseModelAdapter(ABC):
    """Unified interface for streaming chat-completion providers."""

    model_name: str

    @abstractmethod
    def stream_text(
        self,
        messages: list[dict],
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[str]:
        """
        Yield text fragments of the reply in arrival order.
        Provider failures propagate to the caller.
        """
