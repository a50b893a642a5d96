"""
Claude-compatible chat service powered by an OpenAI-style streaming API.

Keeps `create_claude_service(...)` and `stream_conversation(...)` so callers
written against the Claude service interface work unchanged.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, Field

from chatshim.config import ShimConfig, get_config, get_settings
from chatshim.models.base import BaseModelAdapter, ChatMessage, FinalMessage
from chatshim.models.registry import get_adapter
from chatshim.prompts import PromptTable, get_prompts

logger = logging.getLogger(__name__)

_HANDLER_ALIASES = {
    "onText": "on_text",
    "onMessage": "on_message",
    "onToolUse": "on_tool_use",
}


class ConversationRequest(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list)
    prompt_type: Any = Field(default=None, alias="promptType")
    tools: Optional[list[Any]] = None  # reserved for tool calling

    model_config = {"populate_by_name": True}


class StreamHandlers:
    """Optional callbacks; any handler left as None is skipped."""

    def __init__(
        self,
        on_text: Optional[Callable[[str], Any]] = None,
        on_message: Optional[Callable[[FinalMessage], Any]] = None,
        on_tool_use: Optional[Callable[..., Any]] = None,
    ):
        self.on_text = on_text
        self.on_message = on_message
        self.on_tool_use = on_tool_use

    @classmethod
    def coerce(cls, handlers: Any) -> "StreamHandlers":
        """Accept a StreamHandlers, a mapping of callbacks, any object with on_* attributes, or None."""
        if handlers is None:
            return cls()
        if isinstance(handlers, StreamHandlers):
            return handlers
        if isinstance(handlers, Mapping):
            kwargs = {_HANDLER_ALIASES.get(key, key): value for key, value in handlers.items()}
        else:
            kwargs = {name: getattr(handlers, name, None) for name in _HANDLER_ALIASES.values()}
        return cls(
            on_text=kwargs.get("on_text"),
            on_message=kwargs.get("on_message"),
            on_tool_use=kwargs.get("on_tool_use"),
        )

    def text(self, delta: str) -> None:
        if self.on_text is not None:
            self.on_text(delta)

    def message(self, final: FinalMessage) -> None:
        if self.on_message is not None:
            self.on_message(final)


def _content_to_text(content: Any) -> str:
    """Strings pass through; anything else is JSON-encoded."""
    if isinstance(content, str):
        return content
    return json.dumps(content, ensure_ascii=False, separators=(",", ":"))


def normalize_messages(messages: list[ChatMessage]) -> list[dict]:
    return [{"role": m.role, "content": _content_to_text(m.content)} for m in messages]


class ClaudeService:
    def __init__(self, adapter: BaseModelAdapter, config: ShimConfig, prompts: PromptTable):
        self.adapter = adapter
        self.config = config
        self.prompts = prompts

    def get_system_prompt(self, prompt_type: Any) -> str:
        return self.prompts.resolve(prompt_type, self.config.api.default_prompt_type)

    async def stream_conversation(
        self,
        request: Union[ConversationRequest, Mapping[str, Any]],
        handlers: Union[StreamHandlers, Mapping[str, Any], None] = None,
    ) -> FinalMessage:
        """
        Stream a conversation while preserving the Claude-like interface.

        Calls handlers.on_text for each chunk and handlers.on_message at the end,
        and returns a message with stop_reason "end_turn" so the caller's turn
        loop exits. Provider errors propagate and skip on_message.
        """
        if not isinstance(request, ConversationRequest):
            request = ConversationRequest.model_validate(request)
        callbacks = StreamHandlers.coerce(handlers)

        prompt_type = request.prompt_type or self.config.api.default_prompt_type
        system_instruction = self.get_system_prompt(prompt_type)

        if request.tools:
            logger.debug("Ignoring %d tools: tool calling is not supported", len(request.tools))

        chat_messages = [
            {"role": "system", "content": system_instruction},
            *normalize_messages(request.messages),
        ]

        full = ""
        async for delta in self.adapter.stream_text(chat_messages, max_tokens=self.config.api.max_tokens):
            if delta:
                full += delta
                callbacks.text(delta)

        final = FinalMessage(content=full)
        logger.debug("Conversation finished with %d characters", len(full))

        callbacks.message(final)
        return final


def create_claude_service(
    api_key: Optional[str] = None,
    *,
    config: Optional[ShimConfig] = None,
    prompts: Optional[PromptTable] = None,
    adapter: Optional[BaseModelAdapter] = None,
) -> ClaudeService:
    cfg = config or get_config()
    if adapter is None:
        adapter = get_adapter(api_key or get_settings().openai_api_key, cfg)
    return ClaudeService(
        adapter=adapter,
        config=cfg,
        prompts=prompts if prompts is not None else get_prompts(),
    )
