"""Shared test configuration and fixtures."""
from __future__ import annotations

import pytest

from chatshim import config, prompts
from chatshim.config import ApiConfig, ShimConfig
from chatshim.prompts import PromptEntry, PromptTable


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Run each test in an empty directory with fresh singletons."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CHATSHIM_CONFIG_PATH", raising=False)
    monkeypatch.delenv("CHATSHIM_PROMPTS_PATH", raising=False)
    config.reset()
    prompts.reset()
    yield
    config.reset()
    prompts.reset()


@pytest.fixture
def shim_config() -> ShimConfig:
    return ShimConfig(api=ApiConfig(default_model="gpt-test", max_tokens=256, default_prompt_type="standard"))


@pytest.fixture
def prompt_table() -> PromptTable:
    return PromptTable(system_prompts={
        "standard": PromptEntry(content="You are the standard assistant."),
        "pirate": PromptEntry(content="You talk like a pirate."),
    })
