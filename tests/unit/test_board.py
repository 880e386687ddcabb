"""
Unit tests for BoardConfig and Board classes.

Tests configuration validation, tile storage and addressing, neighbor
geometry, aggregate counters and observation generation.
"""
import dataclasses

import pytest
import numpy as np
from minefield import (
    Board,
    BoardConfig,
    BoardSnapshot,
    InvalidConfiguration,
    Tile,
    TileModifier,
    TileState,
)


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_valid_config_creation(self) -> None:
        """Valid configuration should be created successfully."""
        config = BoardConfig(30, 16, 99)
        assert config.width == 30
        assert config.height == 16
        assert config.mines == 99

    def test_zero_width_raises_error(self) -> None:
        """Width of 0 should raise InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration, match="dimensions must be positive"):
            BoardConfig(0, 9, 0)

    def test_zero_height_raises_error(self) -> None:
        """Height of 0 should raise InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration, match="dimensions must be positive"):
            BoardConfig(9, 0, 0)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise InvalidConfiguration."""
        with pytest.raises(InvalidConfiguration, match="cannot be negative"):
            BoardConfig(9, 9, -1)

    def test_invalid_configuration_is_value_error(self) -> None:
        """Callers can catch configuration errors as ValueError."""
        with pytest.raises(ValueError):
            BoardConfig(0, 0, 0)

    def test_too_many_mines_raises_error(self) -> None:
        """Mines must leave room for the 3x3 safe zone."""
        with pytest.raises(InvalidConfiguration, match=r"Too many mines \(max 16\)"):
            BoardConfig(5, 5, 17)

    def test_max_mines_is_valid(self) -> None:
        """Exactly width * height - 9 mines is accepted."""
        config = BoardConfig(5, 5, 16)
        assert config.mines == config.max_mines == 16

    def test_three_by_three_without_mines_is_valid(self) -> None:
        """Smallest board that fits a full safe zone."""
        config = BoardConfig(3, 3, 0)
        assert config.max_mines == 0

    @pytest.mark.parametrize("width,height", [(1, 1), (2, 2), (1, 8), (4, 2)])
    def test_board_smaller_than_safe_zone_rejected(
        self, width: int, height: int
    ) -> None:
        """Boards with fewer than 9 tiles cannot hold even zero mines."""
        with pytest.raises(InvalidConfiguration, match="Too many mines"):
            BoardConfig(width, height, 0)

    def test_config_is_immutable(self) -> None:
        """Configuration cannot change after validation."""
        config = BoardConfig(9, 9, 10)
        with pytest.raises(AttributeError):
            config.mines = 100  # type: ignore[misc]


# ============================================================================
# Board Initialization Tests
# ============================================================================

class TestBoardInitialization:
    """Test board creation and initial state."""

    def test_board_has_correct_dimensions(self, small_board: Board) -> None:
        """Board exposes its configured dimensions."""
        assert small_board.width == 4
        assert small_board.height == 3
        assert small_board.mines == 0

    def test_new_board_all_tiles_blank(self, small_board: Board) -> None:
        """All tiles start empty, unswept and unmarked."""
        for _, _, tile in small_board.tiles():
            assert tile.state == TileState.ZERO
            assert tile.swept is False
            assert tile.modifier is None
            assert tile.safe is False

    def test_new_board_counters_are_zero(self, small_board: Board) -> None:
        """No flags are placed on a new board."""
        assert small_board.flags == 0
        assert small_board.valid_flags == 0

    def test_tiles_are_distinct_objects(self, small_board: Board) -> None:
        """Changing one tile does not change another."""
        small_board.update(0, 0, swept=True)
        assert small_board.tile(0, 0).swept is True
        assert small_board.tile(1, 0).swept is False
        assert small_board.tile(0, 1).swept is False


# ============================================================================
# Tile Access Tests
# ============================================================================

class TestTileAccess:
    """Test (x, y) addressing of tiles."""

    def test_positions_cover_board(self, small_board: Board) -> None:
        """Every position appears exactly once."""
        positions = list(small_board.positions())
        assert len(positions) == 12
        assert len(set(positions)) == 12

    def test_x_is_column_y_is_row(self, small_board: Board) -> None:
        """x ranges over width and y over height."""
        assert small_board.tile(3, 2) is not None
        with pytest.raises(IndexError):
            small_board.tile(2, 3)

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
    def test_out_of_range_raises_index_error(
        self, small_board: Board, x: int, y: int
    ) -> None:
        """Out of range access is a programming error."""
        assert small_board.in_bounds(x, y) is False
        with pytest.raises(IndexError):
            small_board.tile(x, y)


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test neighbor and safe zone geometry."""

    def test_corner_has_three_neighbors(self, small_board: Board) -> None:
        """Corner tile has 3 neighbors."""
        assert sorted(small_board.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]

    def test_edge_has_five_neighbors(self, small_board: Board) -> None:
        """Edge tile has 5 neighbors."""
        assert len(small_board.neighbors(1, 0)) == 5

    def test_interior_has_eight_neighbors(self, small_board: Board) -> None:
        """Interior tile has 8 neighbors, excluding itself."""
        neighbors = small_board.neighbors(1, 1)
        assert len(neighbors) == 8
        assert (1, 1) not in neighbors

    def test_area_includes_center(self, small_board: Board) -> None:
        """Safe zone includes the center tile."""
        assert len(small_board.area(1, 1)) == 9
        assert (1, 1) in small_board.area(1, 1)

    def test_area_is_clipped_at_corner(self, small_board: Board) -> None:
        """Safe zone shrinks to 4 tiles in a corner."""
        assert sorted(small_board.area(3, 2)) == [(2, 1), (2, 2), (3, 1), (3, 2)]


# ============================================================================
# Aggregate Tests
# ============================================================================

class TestAggregates:
    """Test counters derived from the tiles."""

    def test_mine_count(self, small_board: Board) -> None:
        """Mine count reflects tile states."""
        small_board.update(0, 0, state=TileState.MINE)
        small_board.update(3, 2, state=TileState.MINE)
        assert small_board.mine_count() == 2

    def test_swept_count(self, small_board: Board) -> None:
        """Swept count reflects revealed tiles."""
        small_board.update(1, 1, swept=True)
        assert small_board.swept_count() == 1

    def test_snapshot_is_independent(self, small_board: Board) -> None:
        """Snapshot does not follow later changes."""
        snapshot = small_board.snapshot()
        small_board.update(0, 0, swept=True)
        small_board.flags += 1
        assert snapshot.tile(0, 0).swept is False
        assert snapshot.flags == 0
        assert snapshot.config == small_board.config

    def test_snapshot_is_frozen_and_hashable(self, small_board: Board) -> None:
        """Snapshot fields cannot be assigned and equal snapshots hash equal."""
        snapshot = small_board.snapshot()
        assert isinstance(snapshot, BoardSnapshot)
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.flags = 3
        assert hash(snapshot) == hash(small_board.snapshot())
        assert snapshot.get_observation().shape == (3, 4)


# ============================================================================
# Tile Update Tests
# ============================================================================

class TestTileUpdate:
    """Test writing tiles back into the board."""

    def test_update_returns_stored_tile(self, small_board: Board) -> None:
        """Updated tile is what the board now holds."""
        tile = small_board.update(2, 1, swept=True, state=TileState.ONE)
        assert tile == Tile(state=TileState.ONE, swept=True)
        assert small_board.tile(2, 1) is tile

    def test_update_keeps_other_fields(self, small_board: Board) -> None:
        """Only the named fields change."""
        small_board.update(0, 0, state=TileState.MINE)
        tile = small_board.update(0, 0, modifier=TileModifier.FLAGGED)
        assert tile.is_mine is True
        assert tile.is_flagged is True

    def test_put_replaces_tile(self, small_board: Board) -> None:
        """Put stores the given tile."""
        mine = Tile(state=TileState.MINE)
        small_board.put(1, 2, mine)
        assert small_board.tile(1, 2) is mine

    @pytest.mark.parametrize("x,y", [(4, 0), (0, 3)])
    def test_writes_out_of_range_raise(
        self, small_board: Board, x: int, y: int
    ) -> None:
        """Writes are bounds checked like reads."""
        with pytest.raises(IndexError):
            small_board.update(x, y, swept=True)
        with pytest.raises(IndexError):
            small_board.put(x, y, Tile())


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation arrays."""

    def test_observation_shape_is_height_by_width(self, small_board: Board) -> None:
        """Observation is indexed [y, x]."""
        obs = small_board.get_observation()
        assert obs.shape == (3, 4)

    def test_observation_dtype_is_int8(self, small_board: Board) -> None:
        """Observation should be int8."""
        assert small_board.get_observation().dtype == np.int8

    def test_new_board_observation_all_hidden(self, small_board: Board) -> None:
        """New board observation should be all -1."""
        assert np.all(small_board.get_observation() == -1)

    def test_observation_places_tile_at_row_and_column(
        self, small_board: Board
    ) -> None:
        """Tile (x, y) lands at obs[y, x]."""
        small_board.update(3, 1, state=TileState.TWO, swept=True)
        small_board.update(0, 2, modifier=TileModifier.FLAGGED)
        obs = small_board.get_observation()
        assert obs[1, 3] == 2
        assert obs[2, 0] == -2

    def test_reveal_mines(self, small_board: Board) -> None:
        """End of game view shows hidden mines."""
        small_board.update(2, 0, state=TileState.MINE)
        assert small_board.get_observation()[0, 2] == -1
        assert small_board.get_observation(reveal_mines=True)[0, 2] == 9
