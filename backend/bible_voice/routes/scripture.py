from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from bible_voice.pipeline import CommandPipeline, _resolve

router = APIRouter(tags=["scripture"])


class ResolvePayload(BaseModel):
    session_id: str = Field(..., min_length=1)
    label: str = Field(..., description="Classifier output: a reference or a navigation command")


def _pipeline(request: Request) -> CommandPipeline:
    return request.app.state.pipeline


@router.get("/scripture")
async def get_scripture(request: Request, ref: str = Query(..., min_length=1)):
    record = await _resolve(_pipeline(request).store.lookup_by_full_reference(ref))
    if record is None:
        raise HTTPException(status_code=404, detail=f"No verse for {ref!r}")
    return {
        "book": record.book,
        "chapter": record.chapter,
        "verse": record.verse,
        "text": record.text,
        "reference": record.full_reference,
    }


@router.post("/resolve")
async def resolve_label(request: Request, body: ResolvePayload):
    """Run a label against an already connected session; never creates sessions."""
    pipeline = _pipeline(request)
    if body.session_id not in pipeline.sessions:
        raise HTTPException(status_code=404, detail=f"No open session {body.session_id!r}")
    outcome = await pipeline.handle(body.session_id, body.label)
    return outcome.to_message()
