"""
Configuration system — reads chatshim.json + .env
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


# ── JSON schema models ───────────────────────────────────────────────────────

class ApiConfig(BaseModel):
    provider: str = "openai"  # "openai" | "ollama" | "groq" | "openrouter" | ...
    default_model: str = DEFAULT_MODEL
    max_tokens: Optional[int] = None
    default_prompt_type: str = "standardAssistant"
    base_url: Optional[str] = None

    model_config = {"frozen": True}


class ShimConfig(BaseModel):
    version: str = "1.0"
    api: ApiConfig = Field(default_factory=ApiConfig)
    prompts_path: Optional[str] = None

    model_config = {"frozen": True}


# ── App settings (from .env) ─────────────────────────────────────────────────

class AppSettings(BaseSettings):
    config_path: str = "./chatshim.json"
    prompts_path: Optional[str] = None
    openai_api_key: Optional[str] = Field(default=None, validation_alias="OPENAI_API_KEY")

    model_config = {"env_prefix": "CHATSHIM_", "env_file": ".env", "extra": "ignore"}


# ── Singleton loaders ─────────────────────────────────────────────────────────

_config: Optional[ShimConfig] = None
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    global _settings
    if _settings is None:
        load_dotenv()
        _settings = AppSettings()
    return _settings


def load_config(path: Optional[str] = None) -> ShimConfig:
    global _config
    settings = get_settings()
    config_file = Path(path or settings.config_path)

    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        _config = ShimConfig(**data)
        logger.info("Loaded configuration from %s", config_file)
    else:
        _config = ShimConfig()

    return _config


def get_config() -> ShimConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset() -> None:
    """Drop the cached settings and configuration (used by tests)."""
    global _config, _settings
    _config = None
    _settings = None
