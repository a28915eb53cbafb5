"""Puzzle retrieval, placement checking, and scoring endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, Request
from pydantic import AfterValidator, BaseModel

from config import GRID_SIZE
from engine.grid import get_valid_positions, is_valid_placement
from engine.rng import puzzle_seed
from engine.scoring import compute_score, score_breakdown
from engine.turn_plan import PuzzleConfig, TurnPlanCache
from models.tiles import CellKind, PlacementConstraint

router = APIRouter()


def _check_board(grid: list[list[CellKind]]) -> list[list[CellKind]]:
    """Reject boards that are not GRID_SIZE x GRID_SIZE."""
    if len(grid) != GRID_SIZE or any(len(row) != GRID_SIZE for row in grid):
        raise ValueError(f"Grid must be {GRID_SIZE}x{GRID_SIZE}")
    return grid


Board = Annotated[list[list[CellKind]], AfterValidator(_check_board)]


class ValidateRequest(BaseModel):
    """A board plus the constraint to check against."""
    grid: Board
    constraint: PlacementConstraint
    position: tuple[int, int] | None = None  # (row, col) to check, if any


class ValidateResponse(BaseModel):
    """Placement legality for a constraint."""
    valid: bool | None = None       # Only set when a position was given
    valid_positions: list[tuple[int, int]]


class ScoreRequest(BaseModel):
    """A board to score."""
    grid: Board


class TileScore(BaseModel):
    """One placed tile's contribution."""
    row: int
    col: int
    tile: CellKind
    points: int


class ScoreResponse(BaseModel):
    """Total score and where it came from."""
    score: int
    breakdown: list[TileScore]


def _get_puzzles(request: Request) -> TurnPlanCache:
    """Get the app's puzzle cache."""
    return request.app.state.puzzles


@router.get("/puzzle", response_model=PuzzleConfig)
def get_puzzle(
    request: Request,
    post_id: str | None = Query(default=None),
) -> PuzzleConfig:
    """Starting board and every turn's options for a post's puzzle."""
    return _get_puzzles(request).get_or_create(puzzle_seed(post_id))


@router.post("/validate", response_model=ValidateResponse)
def validate_placement(body: ValidateRequest) -> ValidateResponse:
    """Check a placement and list every cell the constraint allows."""
    valid = None
    if body.position is not None:
        row, col = body.position
        valid = is_valid_placement(body.grid, row, col, body.constraint)
    return ValidateResponse(
        valid=valid,
        valid_positions=get_valid_positions(body.grid, body.constraint),
    )


@router.post("/score", response_model=ScoreResponse)
def score_board(body: ScoreRequest) -> ScoreResponse:
    """Score a board and itemize each tile's points."""
    breakdown = score_breakdown(body.grid)
    return ScoreResponse(
        score=compute_score(body.grid),
        breakdown=[
            TileScore(row=row, col=col, tile=body.grid[row][col], points=points)
            for (row, col), points in sorted(breakdown.items())
        ],
    )
