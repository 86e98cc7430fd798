"""Speech-to-text via the OpenAI audio API."""
from __future__ import annotations

import logging
from typing import Optional

from bible_voice.env import ENV
from bible_voice.services.openai_client import get_client

logger = logging.getLogger("bible_voice.stt")


async def transcribe_audio(audio: bytes, *, filename: str = "audio.wav", model: Optional[str] = None) -> str:
    """
    Send one recorded utterance to the transcription model and return its text.
    Errors propagate; the pipeline decides what a failure means.
    """
    if not audio:
        return ""
    if len(audio) > ENV.MAX_AUDIO_BYTES:
        raise ValueError(f"audio payload too large: {len(audio)} > {ENV.MAX_AUDIO_BYTES} bytes")

    client = get_client()
    resp = await client.audio.transcriptions.create(
        model=model or ENV.OPENAI_TRANSCRIBE_MODEL,
        file=(filename, audio),
    )
    text = (resp.text or "").strip()
    logger.debug("[STT] %d bytes -> %r", len(audio), text)
    return text
