from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Dict, Optional, Protocol, Tuple, Union

from .reference import parse_reference

logger = logging.getLogger("bible_voice.store")


@dataclass(frozen=True)
class ScriptureRecord:
    book: str
    chapter: int
    verse: int
    text: str
    full_reference: str


MaybeRecord = Union[Optional[ScriptureRecord], Awaitable[Optional[ScriptureRecord]]]


class ScriptureStore(Protocol):
    """Keyed scripture lookup. Implementations may be sync or async."""

    def lookup_by_fields(self, book: str, chapter: int, verse: int) -> MaybeRecord: ...

    def lookup_by_full_reference(self, reference: str) -> MaybeRecord: ...


class JsonScriptureStore:
    """
    Read-only store over a ``{book: {chapter: {verse: text}}}`` JSON file.

    Book names match case-insensitively; returned records always carry the
    spelling used in the file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._index: Optional[Dict[Tuple[str, int, int], ScriptureRecord]] = None

    def _load(self) -> Dict[Tuple[str, int, int], ScriptureRecord]:
        if self._index is not None:
            return self._index
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise RuntimeError(f"scripture data not found at {self.path}") from exc

        index: Dict[Tuple[str, int, int], ScriptureRecord] = {}
        for book, chapters in raw.items():
            name = " ".join(book.split())
            for chapter_key, verses in chapters.items():
                chapter = int(chapter_key)
                for verse_key, verse_text in verses.items():
                    verse = int(verse_key)
                    index[(name.lower(), chapter, verse)] = ScriptureRecord(
                        book=name,
                        chapter=chapter,
                        verse=verse,
                        text=verse_text.strip(),
                        full_reference=f"{name} {chapter}:{verse}",
                    )
        logger.info("[STORE] loaded %d verses from %s", len(index), self.path)
        self._index = index
        return index

    def lookup_by_fields(self, book: str, chapter: int, verse: int) -> Optional[ScriptureRecord]:
        key = (" ".join((book or "").split()).lower(), chapter, verse)
        return self._load().get(key)

    def lookup_by_full_reference(self, reference: str) -> Optional[ScriptureRecord]:
        position = parse_reference(reference)
        if position is None:
            return None
        return self.lookup_by_fields(position.book, position.chapter, position.verse)

    def __len__(self) -> int:
        return len(self._load())
