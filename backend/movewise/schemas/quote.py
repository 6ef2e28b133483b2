from pydantic import BaseModel, Field


class MoveRequestIn(BaseModel):
    # Kept as plain strings; MoveRequest.validate owns the format rules
    origin_zip: str = ""
    destination_zip: str = ""
    move_date: str = ""
    home_size: str = ""
    requested_services: list[str] = Field(default_factory=list)
    special_items: list[str] = Field(default_factory=list)


class RecommendationRequest(BaseModel):
    session_id: str
    message: str = ""
    quotes: list[dict] | None = None
    move_request: MoveRequestIn | None = None


class IntentRequest(BaseModel):
    message: str
