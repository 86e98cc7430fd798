# backend/bible_voice/socket_manager.py
import logging
from typing import Dict

from fastapi import WebSocket

from bible_voice.sessions import SessionStore

logger = logging.getLogger("bible_voice.ws")


class ConnectionManager:
    """Tracks live sockets and ties each one's reading session to its lifetime."""

    def __init__(self, sessions: SessionStore):
        self.sessions = sessions
        self.active: Dict[str, WebSocket] = {}

    async def connect(self, ws: WebSocket, session_id: str):
        await ws.accept()
        self.active[session_id] = ws
        self.sessions.open(session_id)
        logger.info("[WS] client connected: %s (%d live)", session_id, len(self.active))

    def disconnect(self, session_id: str):
        """Forget the socket and its session. Safe to call more than once."""
        self.active.pop(session_id, None)
        if self.sessions.remove(session_id):
            logger.info("[WS] client disconnected: %s", session_id)

    def is_connected(self, session_id: str) -> bool:
        return session_id in self.active
