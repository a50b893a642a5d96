from chatshim.config import ApiConfig, ShimConfig
from chatshim.models.base import END_TURN, ChatMessage, FinalMessage
from chatshim.prompts import FALLBACK_PROMPT, PromptTable
from chatshim.services.claude import (
    ClaudeService,
    ConversationRequest,
    StreamHandlers,
    create_claude_service,
)

__all__ = [
    "ApiConfig",
    "ChatMessage",
    "ClaudeService",
    "ConversationRequest",
    "END_TURN",
    "FALLBACK_PROMPT",
    "FinalMessage",
    "PromptTable",
    "ShimConfig",
    "StreamHandlers",
    "create_claude_service",
]
