"""Daily attempt quota endpoints."""

import logging

from fastapi import APIRouter, Header, Query, Request

from config import DEFAULT_USER_ID
from engine.quota import KeyValueStore, attempts_remaining, get_status, record_attempt
from engine.rng import puzzle_seed
from models.quota import AttemptRequest, DailyStatus, DailyStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_store(request: Request) -> KeyValueStore:
    """Get the quota store from app state."""
    return request.app.state.store


def _to_response(status: DailyStatus) -> DailyStatusResponse:
    return DailyStatusResponse(
        **status.model_dump(),
        attempts_remaining=attempts_remaining(status),
    )


@router.get("/daily-status", response_model=DailyStatusResponse)
def daily_status(
    request: Request,
    post_id: str | None = Query(default=None),
    x_user_id: str | None = Header(default=None),
) -> DailyStatusResponse:
    """Attempts used and left, and best score, for the caller on a puzzle."""
    status = get_status(
        _get_store(request),
        puzzle_seed(post_id),
        x_user_id or DEFAULT_USER_ID,
    )
    return _to_response(status)


@router.post("/daily-attempt", response_model=DailyStatusResponse)
def daily_attempt(
    body: AttemptRequest,
    request: Request,
    x_user_id: str | None = Header(default=None),
) -> DailyStatusResponse:
    """Record a finished game. Attempts are capped; the best score is kept.

    Negative scores never reach the engine: AttemptRequest rejects them
    with a 422.
    """
    status = record_attempt(
        _get_store(request),
        puzzle_seed(body.post_id),
        x_user_id or DEFAULT_USER_ID,
        body.score,
    )
    return _to_response(status)


@router.get("/post-id")
def post_id(x_post_id: str | None = Header(default=None)) -> dict:
    """The post the caller is viewing, or an empty string when unknown."""
    return {"post_id": x_post_id or ""}
