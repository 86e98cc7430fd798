"""Turns a free-form transcript into a reference or a navigation command."""
from __future__ import annotations

import logging
from typing import Optional

from bible_voice.env import ENV
from bible_voice.scripture import Command
from bible_voice.services.openai_client import get_client

logger = logging.getLogger("bible_voice.classifier")

_COMMANDS = ", ".join(f'"{c.value}"' for c in Command)

SYSTEM_PROMPT = (
    "You route spoken requests for a Bible reading app. Identify either:\n"
    '1. A Bible reference, written as "<Book> <chapter>:<verse>" (e.g. "John 3:16", "1 John 4:8").\n'
    f"2. A navigation command: {_COMMANDS}.\n"
    "Respond ONLY with the reference or the command. No quotes, no explanation."
)


async def classify_text(text: str, *, model: Optional[str] = None) -> str:
    client = get_client()
    resp = await client.chat.completions.create(
        model=model or ENV.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": text},
        ],
        temperature=0,
    )
    out = (resp.choices[0].message.content or "").strip()
    out = out.strip('"“”').strip()
    logger.debug("[CLS] %r -> %r", text, out)
    return out
