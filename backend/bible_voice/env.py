# backend/bible_voice/env.py
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DATA_DIR = Path(__file__).resolve().parent / "data"


def _int_env(name: str, default: int, *, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    token = raw.strip().split()[0]
    try:
        val = int(token)
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        return default
    if max_value is not None and val > max_value:
        return default
    return val


def _list_env(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [t.strip() for t in raw.split(",") if t.strip()]


@dataclass(frozen=True)
class Settings:
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TRANSCRIBE_MODEL: str = os.getenv("OPENAI_TRANSCRIBE_MODEL", "whisper-1")
    SCRIPTURE_DATA_PATH: Path = Path(os.getenv("SCRIPTURE_DATA_PATH") or DATA_DIR / "scripture.json").expanduser()
    CORS_ORIGINS: List[str] = field(default_factory=lambda: _list_env("CORS_ORIGINS", "*"))
    MAX_AUDIO_BYTES: int = _int_env("MAX_AUDIO_BYTES", 10 * 1024 * 1024, min_value=1024)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


ENV = Settings()
