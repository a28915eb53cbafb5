"""FastAPI app entry point for Miniature Borough."""

import logging

from fastapi import FastAPI

from api.daily import router as daily_router
from api.game import router as game_router
from config import CONSTRAINT_MODE, PUZZLE_CACHE_SIZE, QUOTA_FILE
from engine.quota import InMemoryStore, JsonFileStore
from engine.turn_plan import TurnPlanCache
from logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Miniature Borough",
    description="Daily tile-placement puzzle: rules engine and attempt quota",
    version="0.1.0",
)

app.state.store = JsonFileStore(QUOTA_FILE) if QUOTA_FILE else InMemoryStore()
app.state.puzzles = TurnPlanCache(CONSTRAINT_MODE, max_size=PUZZLE_CACHE_SIZE)
logger.info(
    "Quota store: %s, constraint mode: %s",
    QUOTA_FILE or "in-memory", CONSTRAINT_MODE,
)

app.include_router(daily_router, prefix="/api", tags=["Daily"])
app.include_router(game_router, prefix="/api", tags=["Game"])


@app.get("/")
def root() -> dict:
    """Root endpoint returning server info."""
    return {"name": "Miniature Borough", "version": "0.1.0", "status": "running"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"healthy": True}
