"""Fakes for the OpenAI SDK client used across the test suite."""
from __future__ import annotations

from types import SimpleNamespace


def make_chunk(text):
    """An OpenAI-style streaming chunk carrying `text` as its delta."""
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=text))])


class FakeCompletions:
    """Capturing stand-in for `client.chat.completions`."""

    def __init__(self, chunks=(), error=None):
        self.chunks = list(chunks)
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self._stream()

    async def _stream(self):
        for chunk in self.chunks:
            yield chunk


def make_client(chunks=(), error=None):
    completions = FakeCompletions(chunks, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))
