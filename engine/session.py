"""Game session flow: selecting tiles, hovering, and placing them turn by turn."""

from __future__ import annotations

import logging

from config import TOTAL_TURNS
from engine.grid import copy_grid, get_valid_positions, is_valid_placement, place_tile
from engine.scoring import compute_score
from engine.turn_plan import PuzzleConfig, TurnPlanError
from models.game_state import GamePhase, GameState

logger = logging.getLogger(__name__)


def new_game(config: PuzzleConfig) -> GameState:
    """Start a game on a puzzle's initial board with its first turn's options.

    Args:
        config: The seeded puzzle.

    Returns:
        A fresh GameState in the PLAYING phase.

    Raises:
        TurnPlanError: If the puzzle has no turns.
    """
    if not config.turn_options:
        raise TurnPlanError("Failed to generate turn options")

    first = config.turn_options[0]
    grid = copy_grid(config.initial_grid)
    return GameState(
        grid=grid,
        score=compute_score(grid),
        current_options=first.current,
        next_options=first.next,
    )


def select_tile(game_state: GameState, index: int) -> GameState:
    """Select one of the two current options, or deselect it if already chosen.

    Raises:
        ValueError: If index is not 0 or 1.
    """
    if index not in (0, 1):
        raise ValueError(f"Tile index must be 0 or 1, got {index}")

    if game_state.selected_tile_index == index:
        game_state.selected_tile_index = None
    else:
        game_state.selected_tile_index = index
    game_state.hover_cell = None
    return game_state


def set_hover_cell(
    game_state: GameState,
    cell: tuple[int, int] | None,
) -> GameState:
    """Record the cell under the pointer for the placement preview."""
    game_state.hover_cell = cell
    return game_state


def preview_positions(game_state: GameState) -> list[tuple[int, int]]:
    """Cells the selected option could go to. Empty when nothing is selected."""
    if game_state.phase != GamePhase.PLAYING or game_state.selected_tile_index is None:
        return []
    option = game_state.current_options[game_state.selected_tile_index]
    return get_valid_positions(game_state.grid, option.constraint)


def is_hover_valid(game_state: GameState) -> bool:
    """Whether the hovered cell would accept the selected option."""
    if game_state.hover_cell is None or game_state.selected_tile_index is None:
        return False
    row, col = game_state.hover_cell
    option = game_state.current_options[game_state.selected_tile_index]
    return is_valid_placement(game_state.grid, row, col, option.constraint)


def place_selected_tile(
    game_state: GameState,
    config: PuzzleConfig,
    row: int,
    col: int,
) -> bool:
    """Put the selected option's tile at (row, col) and advance the turn.

    Illegal requests (game over, nothing selected, cell not allowed) leave
    the state untouched.

    Args:
        game_state: Current game state (mutated in place).
        config: The puzzle being played, for the upcoming turns' options.
        row: 0-based row.
        col: 0-based column.

    Returns:
        True if the tile was placed.
    """
    if game_state.phase != GamePhase.PLAYING or game_state.selected_tile_index is None:
        return False

    option = game_state.current_options[game_state.selected_tile_index]
    if not is_valid_placement(game_state.grid, row, col, option.constraint):
        return False

    game_state.grid = place_tile(game_state.grid, row, col, option.tile)
    game_state.turn += 1
    game_state.score = compute_score(game_state.grid)
    game_state.selected_tile_index = None
    game_state.hover_cell = None

    total_turns = min(TOTAL_TURNS, len(config.turn_options))
    if game_state.turn >= total_turns:
        game_state.phase = GamePhase.ENDED
        logger.info("Game over on puzzle %r with score %d", config.seed, game_state.score)
        return True

    upcoming = config.turn_options[game_state.turn]
    game_state.current_options = upcoming.current
    game_state.next_options = upcoming.next
    return True
