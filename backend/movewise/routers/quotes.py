"""Quotes router — quote aggregation, recommendations, and provider usage."""

from fastapi import APIRouter, HTTPException

from movewise.exceptions import ValidationError
from movewise.models.move import MoveRequest
from movewise.models.quote import Quote
from movewise.schemas.quote import MoveRequestIn, RecommendationRequest
from movewise.services.quote_engine import quote_engine
from movewise.services.session_store import session_store

router = APIRouter()


def _to_move_request(req: MoveRequestIn) -> MoveRequest:
    try:
        move_request = MoveRequest.from_dict(req.model_dump())
        move_request.validate()
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    return move_request


@router.post("")
async def calculate_quotes(req: MoveRequestIn):
    """Query every provider concurrently and return quotes sorted by price."""
    move_request = _to_move_request(req)
    result = await quote_engine.calculate_quotes(move_request)
    return result.to_dict()


@router.post("/recommendations")
async def generate_recommendations(req: RecommendationRequest):
    """Rank quotes for this conversation turn and update the session profile."""
    origin_zip = destination_zip = None

    if req.quotes is not None:
        try:
            quotes = [Quote.from_dict(q) for q in req.quotes]
        except (KeyError, TypeError, ValueError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid quote payload: {e}")
        if req.move_request:
            origin_zip = req.move_request.origin_zip
            destination_zip = req.move_request.destination_zip
    elif req.move_request:
        move_request = _to_move_request(req.move_request)
        aggregate = await quote_engine.calculate_quotes(move_request)
        quotes = aggregate.quotes
        origin_zip = move_request.origin_zip
        destination_zip = move_request.destination_zip
    else:
        raise HTTPException(status_code=400, detail="Provide either quotes or move_request")

    prior = await session_store.load(req.session_id)
    report = quote_engine.generate_recommendations(
        req.message,
        quotes,
        profile=prior,
        origin_zip=origin_zip,
        destination_zip=destination_zip,
    )
    await session_store.save(req.session_id, report.profile)

    return {"session_id": req.session_id, **report.to_dict()}


@router.get("/usage")
async def provider_usage():
    """Rate-limit usage per provider for the current window."""
    return {"providers": quote_engine.usage_stats()}
