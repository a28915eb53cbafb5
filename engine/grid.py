"""Board creation, neighbourhoods, and placement legality for Miniature Borough."""

from __future__ import annotations

from typing import TYPE_CHECKING

from config import GRID_SIZE
from engine.rng import draw_coin, draw_index
from models.tiles import (
    PLACEABLE_KINDS,
    CellKind,
    ConstraintAxis,
    Grid,
    PlacementConstraint,
)

if TYPE_CHECKING:
    from engine.rng import Rng

ORTHOGONAL_DELTAS = ((-1, 0), (1, 0), (0, -1), (0, 1))
NEARBY_DELTAS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


def create_grid(rng: Rng | None = None, size: int = GRID_SIZE) -> Grid:
    """Initialize a board of grass, optionally with seeded rocks.

    With an RNG, one coin flip picks 1 or 2 rocks, then each rock position
    is drawn as (row, col) and redrawn on collision.

    Args:
        rng: Optional seeded stream. Without one, the board is all grass.
        size: Board edge length.

    Returns:
        A fresh 2D list indexed as grid[row][col].
    """
    grid = [[CellKind.GRASS for _ in range(size)] for _ in range(size)]
    if rng is None:
        return grid

    rock_count = 1 if draw_coin(rng) else 2
    placed = 0
    while placed < rock_count:
        row = draw_index(rng, size)
        col = draw_index(rng, size)
        if grid[row][col] == CellKind.GRASS:
            grid[row][col] = CellKind.ROCK
            placed += 1
    return grid


def copy_grid(grid: Grid) -> Grid:
    """Return a row-by-row copy of a grid."""
    return [list(row) for row in grid]


def in_bounds(row: int, col: int, grid: Grid) -> bool:
    """Check if coordinates are within grid bounds."""
    if not grid:
        return False
    return 0 <= row < len(grid) and 0 <= col < len(grid[0])


def touching_cells(grid: Grid, row: int, col: int) -> list[tuple[int, int]]:
    """The up-to-4 orthogonal neighbours of a cell."""
    return [
        (row + dr, col + dc)
        for dr, dc in ORTHOGONAL_DELTAS
        if in_bounds(row + dr, col + dc, grid)
    ]


def nearby_cells(grid: Grid, row: int, col: int) -> list[tuple[int, int]]:
    """The up-to-8 neighbours of a cell, diagonals included."""
    return [
        (row + dr, col + dc)
        for dr, dc in NEARBY_DELTAS
        if in_bounds(row + dr, col + dc, grid)
    ]


def is_valid_placement(
    grid: Grid,
    row: int,
    col: int,
    constraint: PlacementConstraint,
) -> bool:
    """Check if a tile under this constraint may go at (row, col).

    The cell must be grass and lie on the constrained row or column.
    Never raises: off-board coordinates are simply invalid.

    Args:
        grid: The board.
        row: 0-based row.
        col: 0-based column.
        constraint: The option's row or column restriction (1-based).

    Returns:
        True if the placement is legal.
    """
    if not in_bounds(row, col, grid):
        return False
    if grid[row][col] != CellKind.GRASS:
        return False
    if constraint.axis == ConstraintAxis.ROW:
        return constraint.index == row + 1
    return constraint.index == col + 1


def get_valid_positions(
    grid: Grid,
    constraint: PlacementConstraint,
) -> list[tuple[int, int]]:
    """All grass cells on the constrained row or column, in scan order.

    Args:
        grid: The board.
        constraint: The option's row or column restriction (1-based).

    Returns:
        List of (row, col) positions, at most one line's worth.
    """
    line = constraint.index - 1
    if constraint.axis == ConstraintAxis.ROW:
        cells = [(line, col) for col in range(len(grid[0]) if grid else 0)]
    else:
        cells = [(row, line) for row in range(len(grid))]
    return [
        (row, col) for row, col in cells
        if in_bounds(row, col, grid) and grid[row][col] == CellKind.GRASS
    ]


def place_tile(grid: Grid, row: int, col: int, tile: CellKind) -> Grid:
    """Return a copy of the grid with a tile put down at (row, col).

    Legality against a constraint is the caller's job (see
    is_valid_placement); this only guards the board itself.

    Raises:
        ValueError: If the tile is not placeable or the cell is not grass.
    """
    if tile not in PLACEABLE_KINDS:
        raise ValueError(f"'{tile.value}' cannot be placed")
    if not in_bounds(row, col, grid):
        raise ValueError(f"Position ({row}, {col}) is out of bounds")
    if grid[row][col] != CellKind.GRASS:
        raise ValueError(f"Position ({row}, {col}) is not grass")

    new_grid = copy_grid(grid)
    new_grid[row][col] = tile
    return new_grid
