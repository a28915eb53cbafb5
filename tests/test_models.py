"""Tests for tile and constraint models."""

import pytest
from pydantic import ValidationError

from models.game_state import GamePhase, GameState
from models.tiles import (
    NON_CASTLE_KINDS,
    PLACEABLE_KINDS,
    CellKind,
    ConstraintAxis,
    PlacementConstraint,
    TileOption,
    TurnOptions,
)


def _option(tile: CellKind = CellKind.TREE, index: int = 1) -> TileOption:
    return TileOption(
        tile=tile,
        constraint=PlacementConstraint(axis=ConstraintAxis.ROW, index=index),
    )


class TestCellKinds:
    """Tests for the kind sets."""

    def test_seven_kinds(self):
        assert len(CellKind) == 7

    def test_placeable(self):
        assert CellKind.GRASS not in PLACEABLE_KINDS
        assert CellKind.ROCK not in PLACEABLE_KINDS
        assert len(PLACEABLE_KINDS) == 5

    def test_non_castle_order(self):
        assert NON_CASTLE_KINDS == (
            CellKind.MOUNTAIN, CellKind.TREE, CellKind.FARM, CellKind.HOUSE,
        )

    def test_string_values(self):
        assert CellKind("house") == CellKind.HOUSE
        assert CellKind.GRASS == "grass"


class TestPlacementConstraint:
    """Tests for PlacementConstraint validation."""

    def test_bounds(self):
        PlacementConstraint(axis=ConstraintAxis.ROW, index=1)
        PlacementConstraint(axis=ConstraintAxis.COLUMN, index=6)
        with pytest.raises(ValidationError):
            PlacementConstraint(axis=ConstraintAxis.ROW, index=0)
        with pytest.raises(ValidationError):
            PlacementConstraint(axis=ConstraintAxis.ROW, index=7)

    def test_frozen(self):
        constraint = PlacementConstraint(axis=ConstraintAxis.ROW, index=2)
        with pytest.raises(ValidationError):
            constraint.index = 3


class TestTileOption:
    """Tests for TileOption validation."""

    def test_placeable_tile(self):
        assert _option(CellKind.CASTLE).tile == CellKind.CASTLE

    @pytest.mark.parametrize("kind", [CellKind.GRASS, CellKind.ROCK])
    def test_unplaceable_rejected(self, kind):
        with pytest.raises(ValidationError, match="cannot be placed"):
            _option(kind)

    def test_equality_by_value(self):
        assert _option() == _option()
        assert _option(index=1) != _option(index=2)


class TestTurnOptions:
    """Tests for TurnOptions and GameState defaults."""

    def test_next_defaults_to_none(self):
        entry = TurnOptions(current=(_option(), _option(CellKind.FARM)))
        assert entry.next is None

    def test_game_state_defaults(self):
        state = GameState(grid=[[CellKind.GRASS]], current_options=(_option(), _option()))
        assert state.phase == GamePhase.PLAYING
        assert state.turn == 0
        assert state.selected_tile_index is None
