# backend/bible_voice/pipeline.py
from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Union

from bible_voice.scripture import (
    Position,
    ScriptureRecord,
    ScriptureStore,
    format_reference,
    parse_command,
    parse_reference,
    resolve,
)
from bible_voice.sessions import SessionStore

logger = logging.getLogger("bible_voice.pipeline")

Classifier = Callable[[str], Union[str, Awaitable[str]]]
Transcriber = Callable[[bytes], Union[str, Awaitable[str]]]


async def _resolve(maybe_awaitable):
    return await maybe_awaitable if inspect.isawaitable(maybe_awaitable) else maybe_awaitable


class ErrorKind(str, Enum):
    NO_ACTIVE_SESSION = "no_active_session"
    INVALID_REFERENCE = "invalid_reference"
    NOT_FOUND = "not_found"
    UPSTREAM_FAILURE = "upstream_failure"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    ErrorKind.NO_ACTIVE_SESSION: "No active session",
    ErrorKind.INVALID_REFERENCE: "Invalid reference",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.UPSTREAM_FAILURE: "Upstream failure",
}


@dataclass(frozen=True)
class ResolutionOutcome:
    """Terminal result of one pipeline call: a verse, or exactly one error kind."""

    position: Optional[Position] = None
    text: Optional[str] = None
    full_reference: Optional[str] = None
    error: Optional[ErrorKind] = None

    @classmethod
    def found(cls, position: Position, record: ScriptureRecord) -> "ResolutionOutcome":
        return cls(position=position, text=record.text, full_reference=record.full_reference)

    @classmethod
    def failure(cls, kind: ErrorKind) -> "ResolutionOutcome":
        return cls(error=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_message(self) -> Dict[str, Any]:
        """Shape sent back over the socket."""
        if self.error is not None:
            return {"error": self.error.message, "code": self.error.value}
        return {"quote": self.text, "reference": self.full_reference}


class CommandPipeline:
    """
    Turns a classified utterance into the next position for a session.

    Labels that name a navigation command move relative to the session's
    stored position; anything else must parse as a reference. The session
    is written only after the store returns a record, so every error path
    leaves it exactly as it was.
    """

    def __init__(
        self,
        store: ScriptureStore,
        sessions: SessionStore,
        *,
        classify: Optional[Classifier] = None,
        transcribe: Optional[Transcriber] = None,
    ):
        self.store = store
        self.sessions = sessions
        self.classify = classify
        self.transcribe = transcribe

    async def handle_audio(self, session_id: Hashable, audio: bytes) -> ResolutionOutcome:
        if self.transcribe is None:
            logger.error("[STT] no transcriber configured, dropping audio from session=%s", session_id)
            return ResolutionOutcome.failure(ErrorKind.UPSTREAM_FAILURE)
        try:
            text = await _resolve(self.transcribe(audio))
        except Exception:
            logger.exception("[STT] transcription failed session=%s", session_id)
            return ResolutionOutcome.failure(ErrorKind.UPSTREAM_FAILURE)
        logger.info("[STT] session=%s text=%r", session_id, text)
        return await self.handle_text(session_id, text or "")

    async def handle_text(self, session_id: Hashable, transcript: str) -> ResolutionOutcome:
        if not transcript.strip():
            return ResolutionOutcome.failure(ErrorKind.INVALID_REFERENCE)
        if self.classify is None:
            logger.error("[CLS] no classifier configured, dropping text from session=%s", session_id)
            return ResolutionOutcome.failure(ErrorKind.UPSTREAM_FAILURE)
        try:
            label = await _resolve(self.classify(transcript))
        except Exception:
            logger.exception("[CLS] classification failed session=%s", session_id)
            return ResolutionOutcome.failure(ErrorKind.UPSTREAM_FAILURE)
        logger.info("[CLS] session=%s label=%r", session_id, label)
        return await self.handle(session_id, label or "")

    async def handle(self, session_id: Hashable, label: str) -> ResolutionOutcome:
        command = parse_command(label)
        if command is not None:
            current = self.sessions.get(session_id)
            if current is None:
                logger.info("[NAV] %s with no active session (session=%s)", command.value, session_id)
                return ResolutionOutcome.failure(ErrorKind.NO_ACTIVE_SESSION)
            target = resolve(current, command)
            logger.debug("[NAV] %s: %s -> %s", command.value, format_reference(current), format_reference(target))
            lookup, args = self.store.lookup_by_full_reference, (format_reference(target),)
        else:
            parsed = parse_reference(label)
            if parsed is None:
                logger.info("[REF] not a reference: %r", label)
                return ResolutionOutcome.failure(ErrorKind.INVALID_REFERENCE)
            lookup, args = self.store.lookup_by_fields, (parsed.book, parsed.chapter, parsed.verse)

        try:
            record = await _resolve(lookup(*args))
        except Exception:
            logger.exception("[STORE] lookup failed session=%s label=%r", session_id, label)
            return ResolutionOutcome.failure(ErrorKind.UPSTREAM_FAILURE)

        if record is None:
            logger.info("[REF] not found: %r (session=%s)", label, session_id)
            return ResolutionOutcome.failure(ErrorKind.NOT_FOUND)

        position = parse_reference(record.full_reference)
        if position is None:
            # canonical form outside the reference grammar; trust the record's fields
            logger.warning("[REF] store returned unparseable reference %r", record.full_reference)
            try:
                position = Position(book=record.book, chapter=record.chapter, verse=record.verse)
            except (TypeError, ValueError):
                logger.error("[REF] store returned invalid record %r", record)
                return ResolutionOutcome.failure(ErrorKind.UPSTREAM_FAILURE)

        self.sessions.set(session_id, position)
        logger.info("[REF] session=%s -> %s", session_id, record.full_reference)
        return ResolutionOutcome.found(position, record)
