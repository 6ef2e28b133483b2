"""Chat router — intent classification and session lifecycle."""

from fastapi import APIRouter, HTTPException

from movewise.schemas.quote import IntentRequest
from movewise.services.recommendation.intent_classifier import classify_intent
from movewise.services.session_store import session_store

router = APIRouter()


@router.post("/intent")
async def detect_intent(req: IntentRequest):
    return {"message": req.message, "intent": classify_intent(req.message).value}


@router.get("/sessions/{session_id}")
async def get_session_profile(session_id: str):
    profile = await session_store.load(session_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return {"session_id": session_id, "profile": profile.to_dict()}


@router.delete("/sessions/{session_id}")
async def end_session(session_id: str):
    """Discard the accumulated profile when the conversation ends."""
    if not await session_store.discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"session_id": session_id, "discarded": True}
