"""Display references ("John 3:16") and the structured position they name.

Grammar, matched against the whole string once surrounding whitespace is
stripped, along with one trailing period::

    reference := book SP chapter ":" verse
    book      := [digit [SP]] word (SP word)*
    word      := letters, optionally with an apostrophe
    chapter   := 1-4 digits (>= 1)
    verse     := 1-4 digits (>= 1)

Multi-word books ("Song of Solomon", "1 Corinthians") are captured whole.
Anything else, including a reference buried inside a sentence, is not a
reference and yields ``None``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Optional

_WORD = r"[^\W\d_]+(?:'[^\W\d_]+)?"
_REFERENCE_RE = re.compile(
    rf"(?P<book>(?:\d\s?)?{_WORD}(?:\s+{_WORD})*)\s+(?P<chapter>\d{{1,4}})\s*:\s*(?P<verse>\d{{1,4}})",
    re.UNICODE,
)


@dataclass(frozen=True)
class Position:
    book: str
    chapter: int
    verse: int

    def __post_init__(self) -> None:
        if not self.book:
            raise ValueError("book must be non-empty")
        if self.chapter < 1 or self.verse < 1:
            raise ValueError(f"chapter and verse must be >= 1, got {self.chapter}:{self.verse}")

    def moved(self, *, chapter: Optional[int] = None, verse: Optional[int] = None) -> "Position":
        return replace(
            self,
            chapter=self.chapter if chapter is None else chapter,
            verse=self.verse if verse is None else verse,
        )

    @property
    def reference(self) -> str:
        return format_reference(self)


def parse_reference(raw: Optional[str]) -> Optional[Position]:
    """Parse ``raw`` into a Position, or return None when it is not a reference."""
    if not raw:
        return None
    text = raw.strip()
    if text.endswith("."):
        text = text[:-1].rstrip()
    match = _REFERENCE_RE.fullmatch(text)
    if not match:
        return None

    chapter = int(match.group("chapter"))
    verse = int(match.group("verse"))
    if chapter < 1 or verse < 1:
        return None

    book = " ".join(match.group("book").split())
    return Position(book=book, chapter=chapter, verse=verse)


def format_reference(position: Position) -> str:
    return f"{position.book} {position.chapter}:{position.verse}"
