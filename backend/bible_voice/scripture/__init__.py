"""Reference parsing, navigation and the scripture lookup store."""
from .navigation import Command, parse_command, resolve
from .reference import Position, format_reference, parse_reference
from .store import JsonScriptureStore, ScriptureRecord, ScriptureStore

__all__ = [
    "Command",
    "JsonScriptureStore",
    "Position",
    "ScriptureRecord",
    "ScriptureStore",
    "format_reference",
    "parse_command",
    "parse_reference",
    "resolve",
]
