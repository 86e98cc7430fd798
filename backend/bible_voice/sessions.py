"""Per-connection reading position."""
from typing import Dict, Hashable, Optional

from bible_voice.scripture.reference import Position


class SessionStore:
    """
    Maps a connection id to the last position resolved for it.

    Each id is only touched by its own connection's sequential command
    stream, so no locking is done here. Owned by the server process and
    handed to the pipeline; there is no module-level instance.
    """

    def __init__(self):
        self._positions: Dict[Hashable, Optional[Position]] = {}

    def open(self, session_id: Hashable) -> None:
        """Register a new connection with no position yet."""
        self._positions.setdefault(session_id, None)

    def get(self, session_id: Hashable) -> Optional[Position]:
        return self._positions.get(session_id)

    def set(self, session_id: Hashable, position: Position) -> None:
        self._positions[session_id] = position

    def remove(self, session_id: Hashable) -> bool:
        """Drop the session; returns False if it was already gone."""
        try:
            del self._positions[session_id]
        except KeyError:
            return False
        return True

    def __contains__(self, session_id: Hashable) -> bool:
        return session_id in self._positions

    def __len__(self) -> int:
        return len(self._positions)
