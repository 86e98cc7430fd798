# backend/bible_voice/main.py
import asyncio
import json
import logging
from typing import Optional, Tuple
from uuid import uuid4

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from bible_voice.env import ENV
from bible_voice.pipeline import CommandPipeline, ErrorKind, ResolutionOutcome
from bible_voice.routes import scripture as scripture_routes
from bible_voice.scripture import JsonScriptureStore
from bible_voice.services.classifier import classify_text
from bible_voice.services.transcriber import transcribe_audio
from bible_voice.sessions import SessionStore
from bible_voice.socket_manager import ConnectionManager

logging.basicConfig(
    level=ENV.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("bible_voice.main")

app = FastAPI(title="Voice Scripture Backend", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ENV.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.include_router(scripture_routes.router, prefix="/api")


def configure(target: FastAPI, pipeline: CommandPipeline) -> None:
    """Install the pipeline and a connection manager sharing its session store."""
    target.state.pipeline = pipeline
    target.state.manager = ConnectionManager(pipeline.sessions)


def build_pipeline() -> CommandPipeline:
    return CommandPipeline(
        JsonScriptureStore(ENV.SCRIPTURE_DATA_PATH),
        SessionStore(),
        classify=classify_text,
        transcribe=transcribe_audio,
    )


configure(app, build_pipeline())


@app.get("/")
def root():
    return {"ok": True, "msg": "server is live"}


@app.get("/health")
def health():
    return {"status": "ok"}


def _parse_text_frame(raw: str) -> Optional[str]:
    """Text frames carry a transcript, either bare or as {"type": "utterance", "text": ...}."""
    raw = (raw or "").strip()
    if not raw.startswith("{"):
        return raw
    try:
        payload = json.loads(raw)
    except ValueError:
        return raw
    if not isinstance(payload, dict) or payload.get("type") != "utterance":
        return None
    return str(payload.get("text") or "")


# ------------------------------------------------------------------------------
# /ws/scripture
#  - binary frames: one recorded utterance (audio) → transcribe → classify
#  - text frames: an already transcribed utterance → classify
#  - each frame gets exactly one reply: {"quote","reference"} or {"error"}
# ------------------------------------------------------------------------------
@app.websocket("/ws/scripture")
async def ws_scripture(websocket: WebSocket):
    pipeline: CommandPipeline = websocket.app.state.pipeline
    manager: ConnectionManager = websocket.app.state.manager
    session_id = uuid4().hex
    await manager.connect(websocket, session_id)

    # one worker per connection keeps utterances in order and non-overlapping
    inbox: "asyncio.Queue[Tuple[str, object]]" = asyncio.Queue()
    closed = asyncio.Event()

    async def from_client():
        try:
            while True:
                msg = await websocket.receive()
                if msg.get("type") == "websocket.disconnect":
                    break
                if (b := msg.get("bytes")) is not None:
                    await inbox.put(("audio", b))
                elif (t := msg.get("text")) is not None:
                    text = _parse_text_frame(t)
                    if text is None:
                        logger.debug("[WS] ignoring control frame from %s", session_id)
                        continue
                    await inbox.put(("text", text))
        finally:
            closed.set()

    async def worker():
        while True:
            kind, payload = await inbox.get()
            try:
                if kind == "audio":
                    outcome = await pipeline.handle_audio(session_id, payload)
                else:
                    outcome = await pipeline.handle_text(session_id, payload)
            except Exception:
                logger.exception("[WS] %s frame from %s failed", kind, session_id)
                outcome = ResolutionOutcome.failure(ErrorKind.UPSTREAM_FAILURE)
            if not manager.is_connected(session_id):
                return
            try:
                await websocket.send_json(outcome.to_message())
            except Exception as e:
                logger.warning("[WS] send to %s failed: %s", session_id, e)
                return

    reader = asyncio.create_task(from_client())
    processor = asyncio.create_task(worker())
    try:
        await closed.wait()
    finally:
        try:
            for task in (reader, processor):
                task.cancel()
            results = await asyncio.gather(reader, processor, return_exceptions=True)
            for res in results:
                if isinstance(res, Exception):
                    logger.error("[WS] connection task for %s failed: %r", session_id, res)
        finally:
            manager.disconnect(session_id)
