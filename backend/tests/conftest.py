import json

import pytest

from bible_voice.pipeline import CommandPipeline
from bible_voice.scripture import JsonScriptureStore
from bible_voice.sessions import SessionStore

VERSES = {
    "John": {
        "3": {
            "1": "There was a man of the Pharisees, named Nicodemus, a ruler of the Jews:",
            "2": "The same came to Jesus by night...",
            "3": "Jesus answered and said unto him...",
            "16": "For God so loved the world...",
            "17": "For God sent not his Son into the world to condemn the world...",
        },
        "4": {
            "1": "When therefore the Lord knew how the Pharisees had heard...",
        },
    },
    "1 John": {"4": {"8": "He that loveth not knoweth not God; for God is love."}},
    "Song of Solomon": {"2": {"1": "I am the rose of Sharon, and the lily of the valleys."}},
}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def data_path(tmp_path):
    path = tmp_path / "scripture.json"
    path.write_text(json.dumps(VERSES), encoding="utf-8")
    return path


@pytest.fixture
def store(data_path):
    return JsonScriptureStore(data_path)


@pytest.fixture
def sessions():
    return SessionStore()


@pytest.fixture
def pipeline(store, sessions):
    # the classifier stand-in echoes the transcript, so tests speak in labels
    return CommandPipeline(store, sessions, classify=lambda text: text.strip())
