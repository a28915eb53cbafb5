"""Tile, constraint, and turn plan models for Miniature Borough."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import GRID_SIZE


class CellKind(str, Enum):
    """Everything a board cell can hold."""
    MOUNTAIN = "mountain"
    TREE = "tree"
    FARM = "farm"
    CASTLE = "castle"
    HOUSE = "house"
    GRASS = "grass"                 # Empty cell
    ROCK = "rock"                   # Pre-placed obstacle


PLACEABLE_KINDS = frozenset({
    CellKind.MOUNTAIN,
    CellKind.TREE,
    CellKind.FARM,
    CellKind.CASTLE,
    CellKind.HOUSE,
})

# Draw order matters: seeded plans index into this list.
NON_CASTLE_KINDS: tuple[CellKind, ...] = (
    CellKind.MOUNTAIN,
    CellKind.TREE,
    CellKind.FARM,
    CellKind.HOUSE,
)

Grid = list[list[CellKind]]         # grid[row][col]


class ConstraintAxis(str, Enum):
    """Which line of the board a tile option is tied to."""
    ROW = "row"
    COLUMN = "column"


class PlacementConstraint(BaseModel):
    """Restricts a tile to one row or one column (1-based index)."""
    model_config = ConfigDict(frozen=True)

    axis: ConstraintAxis
    index: int = Field(ge=1, le=GRID_SIZE)


class TileOption(BaseModel):
    """A placeable tile paired with where it may go."""
    model_config = ConfigDict(frozen=True)

    tile: CellKind
    constraint: PlacementConstraint

    @field_validator("tile")
    @classmethod
    def _must_be_placeable(cls, value: CellKind) -> CellKind:
        if value not in PLACEABLE_KINDS:
            raise ValueError(f"'{value.value}' cannot be placed")
        return value


class TurnOptions(BaseModel):
    """The two options offered this turn plus a preview of the next turn."""
    model_config = ConfigDict(frozen=True)

    current: tuple[TileOption, TileOption]
    next: tuple[TileOption, TileOption] | None = None  # None on the last turn
