"""OpenAI-compatible adapter, driven through a fake SDK client."""
import asyncio
from types import SimpleNamespace

import pytest

from chatshim.config import ApiConfig, ShimConfig
from chatshim.models.openai_compat import OpenAICompatAdapter
from chatshim.models.registry import get_adapter
from helpers import make_chunk, make_client


async def _collect(adapter, messages, **kwargs):
    return [text async for text in adapter.stream_text(messages, **kwargs)]


class TestOpenAICompatAdapter:
    def test_yields_deltas_in_order(self):
        client = make_client([make_chunk("Hel"), make_chunk("lo")])
        adapter = OpenAICompatAdapter("gpt-test", _client=client)
        assert asyncio.run(_collect(adapter, [])) == ["Hel", "lo"]

    def test_skips_empty_and_choiceless_chunks(self):
        client = make_client([
            SimpleNamespace(choices=[]),
            make_chunk(None),
            make_chunk(""),
            make_chunk("x"),
        ])
        adapter = OpenAICompatAdapter("gpt-test", _client=client)
        assert asyncio.run(_collect(adapter, [])) == ["x"]

    def test_request_is_streaming_with_model_and_messages(self):
        client = make_client()
        adapter = OpenAICompatAdapter("gpt-test", _client=client)
        messages = [{"role": "user", "content": "hi"}]
        asyncio.run(_collect(adapter, messages, max_tokens=64))
        call = client.chat.completions.calls[0]
        assert call["model"] == "gpt-test"
        assert call["messages"] == messages
        assert call["stream"] is True
        assert call["max_tokens"] == 64

    def test_max_tokens_omitted_when_unset(self):
        client = make_client()
        adapter = OpenAICompatAdapter("gpt-test", _client=client)
        asyncio.run(_collect(adapter, []))
        assert "max_tokens" not in client.chat.completions.calls[0]

    def test_provider_errors_propagate(self):
        client = make_client(error=RuntimeError("rate limited"))
        adapter = OpenAICompatAdapter("gpt-test", _client=client)
        with pytest.raises(RuntimeError, match="rate limited"):
            asyncio.run(_collect(adapter, []))


class TestRegistry:
    def test_uses_configured_model(self):
        cfg = ShimConfig(api=ApiConfig(default_model="gpt-4o"))
        adapter = get_adapter("sk-test", cfg)
        assert isinstance(adapter, OpenAICompatAdapter)
        assert adapter.model_name == "gpt-4o"

    def test_explicit_base_url_wins(self):
        cfg = ShimConfig(api=ApiConfig(provider="groq", base_url="http://proxy/v1"))
        assert get_adapter("k", cfg)._base_url == "http://proxy/v1"

    def test_known_provider_base_url(self):
        cfg = ShimConfig(api=ApiConfig(provider="groq"))
        assert get_adapter("k", cfg)._base_url == "https://api.groq.com/openai/v1"

    def test_ollama_gets_placeholder_key(self):
        cfg = ShimConfig(api=ApiConfig(provider="ollama", default_model="llama3"))
        adapter = get_adapter(None, cfg)
        assert adapter._api_key == "ollama"
        assert adapter._base_url == "http://localhost:11434/v1"

    def test_empty_model_falls_back_to_default(self):
        cfg = ShimConfig(api=ApiConfig(default_model=""))
        assert get_adapter("k", cfg).model_name == "gpt-4o-mini"

    def test_openai_provider_leaves_base_url_to_sdk(self):
        cfg = ShimConfig(api=ApiConfig(provider="openai"))
        assert get_adapter("k", cfg)._base_url is None
