"""Seeded generation of every turn's tile options, plus the per-seed cache."""

from __future__ import annotations

import logging
from collections import OrderedDict

from pydantic import BaseModel

from config import CONSTRAINT_MODE, GRID_SIZE, PUZZLE_CACHE_SIZE, TOTAL_TURNS
from engine.grid import create_grid
from engine.rng import Rng, create_rng, draw_coin, draw_index
from models.tiles import (
    NON_CASTLE_KINDS,
    CellKind,
    ConstraintAxis,
    PlacementConstraint,
    TileOption,
    TurnOptions,
)

logger = logging.getLogger(__name__)

CONSTRAINT_MODES = ("shared", "independent")


class TurnPlanError(RuntimeError):
    """A generated plan broke its own invariants. Indicates a bug, not bad input."""


def _draw_tile(rng: Rng, slot: int, castle_slot: int) -> CellKind:
    """Castle for the chosen slot, otherwise one of the other four kinds."""
    if slot == castle_slot:
        return CellKind.CASTLE
    return NON_CASTLE_KINDS[draw_index(rng, len(NON_CASTLE_KINDS))]


def _shared_constraints(
    rng: Rng,
) -> tuple[PlacementConstraint, PlacementConstraint]:
    """One row and one column for the turn, split between the two options."""
    row = PlacementConstraint(axis=ConstraintAxis.ROW, index=draw_index(rng, GRID_SIZE) + 1)
    column = PlacementConstraint(axis=ConstraintAxis.COLUMN, index=draw_index(rng, GRID_SIZE) + 1)
    if draw_coin(rng):
        return row, column
    return column, row


def _independent_constraint(rng: Rng) -> PlacementConstraint:
    """Axis and index drawn for a single option."""
    axis = ConstraintAxis.ROW if draw_coin(rng) else ConstraintAxis.COLUMN
    return PlacementConstraint(axis=axis, index=draw_index(rng, GRID_SIZE) + 1)


def check_turn_plan(plan: list[TurnOptions], turns: int = TOTAL_TURNS) -> None:
    """Verify a plan's structure.

    Raises:
        TurnPlanError: If the plan has the wrong length, does not hold
            exactly one castle, or its previews do not line up.
    """
    if len(plan) != turns:
        raise TurnPlanError(f"Expected {turns} turns, got {len(plan)}")

    castles = sum(
        1 for entry in plan for option in entry.current
        if option.tile == CellKind.CASTLE
    )
    if castles != 1:
        raise TurnPlanError(f"Expected exactly one castle, got {castles}")

    for entry, following in zip(plan, plan[1:]):
        if entry.next != following.current:
            raise TurnPlanError("Turn preview does not match the following turn")
    if plan[-1].next is not None:
        raise TurnPlanError("Last turn must not have a preview")


def generate_all_turn_options(
    rng: Rng,
    constraint_mode: str = CONSTRAINT_MODE,
    turns: int = TOTAL_TURNS,
) -> list[TurnOptions]:
    """Pre-generate the tile options for every turn of a game.

    Consumes the stream in a fixed order: the castle slot first, then per
    turn the two tile kinds followed by the constraint draws. The castle
    lands in exactly one of the 2 * turns option slots.

    Args:
        rng: Seeded float stream.
        constraint_mode: "shared" splits one row index and one column index
            across the turn's two options; "independent" draws axis and
            index separately for each option.
        turns: Number of turns to plan.

    Returns:
        One TurnOptions per turn. Each entry's preview is the following
        entry's current pair; the last entry has no preview.

    Raises:
        ValueError: If constraint_mode is unknown or the stream yields a
            value outside [0, 1).
        TurnPlanError: If the finished plan breaks its invariants.
    """
    if constraint_mode not in CONSTRAINT_MODES:
        raise ValueError(
            f"Unknown constraint mode '{constraint_mode}' "
            f"(expected one of {', '.join(CONSTRAINT_MODES)})"
        )

    castle_slot = draw_index(rng, turns * 2)
    currents: list[tuple[TileOption, TileOption]] = []

    for turn in range(turns):
        tile_a = _draw_tile(rng, turn * 2, castle_slot)
        tile_b = _draw_tile(rng, turn * 2 + 1, castle_slot)
        if constraint_mode == "shared":
            constraint_a, constraint_b = _shared_constraints(rng)
        else:
            constraint_a = _independent_constraint(rng)
            constraint_b = _independent_constraint(rng)
        currents.append((
            TileOption(tile=tile_a, constraint=constraint_a),
            TileOption(tile=tile_b, constraint=constraint_b),
        ))

    plan = [
        TurnOptions(
            current=current,
            next=currents[turn + 1] if turn + 1 < turns else None,
        )
        for turn, current in enumerate(currents)
    ]
    check_turn_plan(plan, turns)

    logger.debug(
        "Generated %d-turn plan (%s constraints), castle in slot %d",
        turns, constraint_mode, castle_slot,
    )
    return plan


class PuzzleConfig(BaseModel):
    """Everything fixed for one puzzle: the starting board and the plan."""
    seed: str
    initial_grid: list[list[CellKind]]
    turn_options: list[TurnOptions]


def build_puzzle(seed: str, constraint_mode: str = CONSTRAINT_MODE) -> PuzzleConfig:
    """Build a puzzle from one seeded stream: rocks first, then the turn plan."""
    rng = create_rng(seed)
    initial_grid = create_grid(rng)
    turn_options = generate_all_turn_options(rng, constraint_mode)
    return PuzzleConfig(seed=seed, initial_grid=initial_grid, turn_options=turn_options)


class TurnPlanCache:
    """Puzzles memoized per seed for the lifetime of a caller's session.

    Create one at session start and drop it (or call clear()) at the end.
    Holds at most max_size puzzles; the least recently used one is dropped
    to make room for a new seed.
    """

    def __init__(
        self,
        constraint_mode: str = CONSTRAINT_MODE,
        max_size: int = PUZZLE_CACHE_SIZE,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"Cache size must be at least 1, got {max_size}")
        self.constraint_mode = constraint_mode
        self.max_size = max_size
        self._puzzles: OrderedDict[str, PuzzleConfig] = OrderedDict()

    def get_or_create(self, seed: str) -> PuzzleConfig:
        """Return the cached puzzle for a seed, building it on first use."""
        puzzle = self._puzzles.get(seed)
        if puzzle is None:
            puzzle = build_puzzle(seed, self.constraint_mode)
            while len(self._puzzles) >= self.max_size:
                oldest_seed, _ = self._puzzles.popitem(last=False)
                logger.debug("Puzzle cache full, dropped seed %r", oldest_seed)
            self._puzzles[seed] = puzzle
        else:
            self._puzzles.move_to_end(seed)
            logger.debug("Puzzle cache hit for seed %r", seed)
        return puzzle.model_copy(deep=True)

    def clear(self) -> None:
        """Forget every cached puzzle."""
        self._puzzles.clear()

    def __len__(self) -> int:
        return len(self._puzzles)

    def __contains__(self, seed: object) -> bool:
        return seed in self._puzzles
