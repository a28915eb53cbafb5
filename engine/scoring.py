"""Tile scoring rules for Miniature Borough.

Each placed tile scores by its own rule:

- mountain: +1 per tree nearby (8 neighbours)
- tree: +1 per tree touching (4 neighbours)
- farm: +1 per grass touching
- castle: length of the shortest grass path to the nearest house
- house: +1 per distinct kind nearby

Grass and rock score nothing.
"""

from __future__ import annotations

from collections import deque

from engine.grid import nearby_cells, touching_cells
from models.tiles import CellKind, Grid


def shortest_grass_path(grid: Grid, start: tuple[int, int]) -> int | None:
    """Steps from a cell to the nearest house, walking only through grass.

    BFS moves orthogonally and only enters grass cells. A house touching
    the cell being expanded ends the search; the step onto the house
    counts, so a house directly beside the start is 1 step away.
    Rocks, other tiles, and the board edge block the path.

    Args:
        grid: The board.
        start: (row, col) the path begins at (usually a castle).

    Returns:
        The step count, or None if no house can be reached.
    """
    visited = {start}
    queue = deque([(start, 0)])

    while queue:
        (row, col), dist = queue.popleft()
        for nr, nc in touching_cells(grid, row, col):
            cell = grid[nr][nc]
            if cell == CellKind.HOUSE:
                return dist + 1
            if cell != CellKind.GRASS or (nr, nc) in visited:
                continue
            visited.add((nr, nc))
            queue.append(((nr, nc), dist + 1))

    return None


def score_cell(grid: Grid, row: int, col: int) -> int:
    """Points earned by the tile at (row, col)."""
    cell = grid[row][col]

    if cell == CellKind.MOUNTAIN:
        return sum(
            1 for nr, nc in nearby_cells(grid, row, col)
            if grid[nr][nc] == CellKind.TREE
        )

    if cell == CellKind.TREE:
        return sum(
            1 for nr, nc in touching_cells(grid, row, col)
            if grid[nr][nc] == CellKind.TREE
        )

    if cell == CellKind.FARM:
        return sum(
            1 for nr, nc in touching_cells(grid, row, col)
            if grid[nr][nc] == CellKind.GRASS
        )

    if cell == CellKind.CASTLE:
        return shortest_grass_path(grid, (row, col)) or 0

    if cell == CellKind.HOUSE:
        return len({grid[nr][nc] for nr, nc in nearby_cells(grid, row, col)})

    # Grass and rock
    return 0


def score_breakdown(grid: Grid) -> dict[tuple[int, int], int]:
    """Per-tile points for every placed tile on the board.

    Returns:
        Dict mapping (row, col) to that tile's points. Grass and rock
        cells are left out.
    """
    return {
        (row, col): score_cell(grid, row, col)
        for row, cells in enumerate(grid)
        for col, cell in enumerate(cells)
        if cell not in (CellKind.GRASS, CellKind.ROCK)
    }


def compute_score(grid: Grid) -> int:
    """Total score of the board, recomputed from scratch."""
    return sum(score_breakdown(grid).values())
