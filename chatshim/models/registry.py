"""
Model registry — creates the streaming adapter based on config.

Supported providers (all through OpenAICompatAdapter):
  openai     → SDK default (honours OPENAI_BASE_URL)
  ollama     → localhost:11434/v1 (no key needed)
  groq       → api.groq.com/openai/v1
  openrouter → openrouter.ai/api/v1
  together   → api.together.xyz/v1
  <any>      → whatever base_url is set in config, else the SDK default
"""
from __future__ import annotations

from typing import Optional

from chatshim.config import DEFAULT_MODEL, ShimConfig, get_config
from chatshim.models.base import BaseModelAdapter
from chatshim.models.openai_compat import OpenAICompatAdapter

# Well-known base URLs for providers that don't require base_url in config
_PROVIDER_DEFAULTS: dict[str, str] = {
    "ollama":      "http://localhost:11434/v1",
    "groq":        "https://api.groq.com/openai/v1",
    "openrouter":  "https://openrouter.ai/api/v1",
    "together":    "https://api.together.xyz/v1",
    "mistral":     "https://api.mistral.ai/v1",
    "deepseek":    "https://api.deepseek.com/v1",
}


def get_adapter(api_key: Optional[str] = None, config: Optional[ShimConfig] = None) -> BaseModelAdapter:
    cfg = config or get_config()
    api = cfg.api

    # Resolve base_url: explicit config > known provider defaults > SDK default
    base_url = api.base_url or _PROVIDER_DEFAULTS.get(api.provider)

    # Ollama doesn't need a real key
    if not api_key and api.provider == "ollama":
        api_key = "ollama"

    return OpenAICompatAdapter(
        model_name=api.default_model or DEFAULT_MODEL,
        api_key=api_key,
        base_url=base_url,
    )
