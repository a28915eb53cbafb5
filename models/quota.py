"""Daily attempt quota request and response models."""

from pydantic import BaseModel, Field


class DailyStatus(BaseModel):
    """How many attempts a user has spent on a puzzle, and their best score."""
    attempts_used: int = 0
    max_score: int = 0


class DailyStatusResponse(DailyStatus):
    """DailyStatus as served over HTTP, with the attempts still available."""
    attempts_remaining: int


class AttemptRequest(BaseModel):
    """A finished game submitted for the quota record."""
    score: int = Field(ge=0)
    post_id: str | None = None      # Falls back to today's puzzle
