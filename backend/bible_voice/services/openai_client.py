"""Shared AsyncOpenAI client."""
from __future__ import annotations

from openai import AsyncOpenAI

from bible_voice.env import ENV

_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        if not ENV.OPENAI_API_KEY:
            raise RuntimeError("OPENAI_API_KEY not set")
        _client = AsyncOpenAI(api_key=ENV.OPENAI_API_KEY)
    return _client
