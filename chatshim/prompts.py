"""
System prompt table — static prompt-type → content mapping read from JSON.

File format:
  {"systemPrompts": {"<prompt type>": {"content": "...", "description": "..."}}}
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from chatshim.config import get_config, get_settings

logger = logging.getLogger(__name__)

FALLBACK_PROMPT = "You are a helpful assistant."
BUNDLED_PROMPTS_PATH = Path(__file__).parent / "data" / "prompts.json"


class PromptEntry(BaseModel):
    content: str = ""
    description: Optional[str] = None

    model_config = {"frozen": True}


class PromptTable(BaseModel):
    system_prompts: Mapping[str, PromptEntry] = Field(default_factory=dict, alias="systemPrompts", validate_default=True)

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("system_prompts", mode="after")
    @classmethod
    def _read_only(cls, value: Mapping[str, PromptEntry]) -> Mapping[str, PromptEntry]:
        return MappingProxyType(dict(value))

    def get(self, prompt_type: Any) -> Optional[str]:
        """Content for `prompt_type`, or None when absent, empty or not a string."""
        if not prompt_type or not isinstance(prompt_type, str):
            return None
        entry = self.system_prompts.get(prompt_type)
        if entry is None or not entry.content:
            return None
        return entry.content

    def resolve(self, prompt_type: Any, default_type: Optional[str]) -> str:
        """
        Resolve a system prompt: requested type → default type → FALLBACK_PROMPT.
        Never raises.
        """
        content = self.get(prompt_type)
        if content is not None:
            return content
        content = self.get(default_type)
        if content is not None:
            logger.debug("Prompt type %r not found, using default %r", prompt_type, default_type)
            return content
        logger.debug("Prompt types %r and %r not found, using fallback", prompt_type, default_type)
        return FALLBACK_PROMPT


# ── Singleton loader ──────────────────────────────────────────────────────────

_prompts: Optional[PromptTable] = None


def _prompts_file(path: Optional[str]) -> Path:
    if path:
        return Path(path)
    configured = get_settings().prompts_path or get_config().prompts_path
    return Path(configured) if configured else BUNDLED_PROMPTS_PATH


def load_prompts(path: Optional[str] = None) -> PromptTable:
    global _prompts
    prompts_file = _prompts_file(path)

    if prompts_file.exists():
        with open(prompts_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        _prompts = PromptTable(**data)
        logger.info("Loaded %d system prompts from %s", len(_prompts.system_prompts), prompts_file)
    else:
        logger.warning("Prompt file %s not found, only the fallback prompt is available", prompts_file)
        _prompts = PromptTable()

    return _prompts


def get_prompts() -> PromptTable:
    global _prompts
    if _prompts is None:
        _prompts = load_prompts()
    return _prompts


def reset() -> None:
    """Drop the cached prompt table (used by tests)."""
    global _prompts
    _prompts = None
