"""Relative navigation ("next verse", "previous chapter", ...)."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from .reference import Position


class Command(str, Enum):
    NEXT_VERSE = "next verse"
    PREVIOUS_VERSE = "previous verse"
    NEXT_CHAPTER = "next chapter"
    PREVIOUS_CHAPTER = "previous chapter"


_BY_PHRASE = {c.value: c for c in Command}


def _norm(text: str) -> str:
    return " ".join((text or "").split()).lower()


def parse_command(label: Optional[str]) -> Optional[Command]:
    """Match classifier output against the command vocabulary, ignoring case and spacing."""
    phrase = _norm(label or "")
    if phrase.endswith("."):
        phrase = phrase[:-1].rstrip()
    return _BY_PHRASE.get(phrase)


def resolve(current: Position, command: Command) -> Position:
    """
    Compute the candidate position one step away from ``current``.

    No upper bounds are checked here: whether the target exists is for the
    scripture store to say. Chapter and verse never drop below 1.
    """
    if command is Command.NEXT_VERSE:
        return current.moved(verse=current.verse + 1)
    if command is Command.PREVIOUS_VERSE:
        return current.moved(verse=max(1, current.verse - 1))
    if command is Command.NEXT_CHAPTER:
        return current.moved(chapter=current.chapter + 1, verse=1)
    if command is Command.PREVIOUS_CHAPTER:
        return current.moved(chapter=max(1, current.chapter - 1), verse=1)
    raise ValueError(f"unknown command: {command!r}")
