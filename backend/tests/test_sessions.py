from bible_voice.scripture import Position
from bible_voice.sessions import SessionStore


def test_open_session_has_no_position():
    sessions = SessionStore()
    sessions.open("a")
    assert "a" in sessions
    assert sessions.get("a") is None


def test_set_and_get():
    sessions = SessionStore()
    sessions.set("a", Position("John", 3, 16))
    assert sessions.get("a") == Position("John", 3, 16)


def test_open_does_not_reset_existing_position():
    sessions = SessionStore()
    sessions.set("a", Position("John", 3, 16))
    sessions.open("a")
    assert sessions.get("a") == Position("John", 3, 16)


def test_remove():
    sessions = SessionStore()
    sessions.open("a")
    assert sessions.remove("a") is True
    assert sessions.remove("a") is False
    assert "a" not in sessions
    assert sessions.get("a") is None


def test_sessions_are_isolated():
    sessions = SessionStore()
    sessions.set("a", Position("John", 3, 16))
    sessions.set("b", Position("Genesis", 1, 1))
    sessions.remove("b")
    assert sessions.get("a") == Position("John", 3, 16)
    assert len(sessions) == 1
