"""Game session state for Miniature Borough."""

from enum import Enum

from pydantic import BaseModel

from models.tiles import CellKind, TileOption


class GamePhase(str, Enum):
    """Possible states for a game."""
    PLAYING = "playing"
    ENDED = "ended"                 # All turns used


class GameState(BaseModel):
    """Everything a single player's session tracks between turns.

    The engine never stores this itself; the caller owns it and passes it
    back into the session functions.
    """
    grid: list[list[CellKind]]      # 2D grid [row][col]
    turn: int = 0
    phase: GamePhase = GamePhase.PLAYING
    score: int = 0
    current_options: tuple[TileOption, TileOption]
    next_options: tuple[TileOption, TileOption] | None = None
    selected_tile_index: int | None = None  # 0 or 1
    hover_cell: tuple[int, int] | None = None  # (row, col)
