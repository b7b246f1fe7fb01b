"""
Unit tests for the reveal engine.

Tests flood fill, chord seeds, commit and mine exposure on boards with
known layouts.
"""
import pytest
from minesweeper import Board
from minesweeper.reveal import chord_seeds, commit, expose_mines, flood_fill

WALL = [(2, y) for y in range(5)]


@pytest.fixture
def corner_board(make_board) -> Board:
    """5x5 board with a single mine in the bottom-right corner."""
    return make_board(5, 5, [(4, 4)], safe=(0, 0))


@pytest.fixture
def wall_board(make_board) -> Board:
    """5x5 board split by a column of mines at x=2."""
    return make_board(5, 5, WALL, safe=(0, 2))


# ============================================================================
# Flood Fill Tests
# ============================================================================

class TestFloodFill:
    """Test flood fill collection."""

    def test_zero_tile_floods_whole_region(self, corner_board: Board) -> None:
        """An empty corner opens every connected safe tile."""
        pending = flood_fill(corner_board, [(0, 0)])
        assert pending == set(corner_board.positions()) - {(4, 4)}

    def test_flood_stops_at_numbered_border(self, wall_board: Board) -> None:
        """Numbered tiles are collected but not expanded."""
        pending = flood_fill(wall_board, [(0, 0)])
        assert pending == {(x, y) for x in (0, 1) for y in range(5)}

    def test_flood_never_collects_mines(self, wall_board: Board) -> None:
        """Flood fill never reaches past numbered tiles onto mines."""
        pending = flood_fill(wall_board, [(0, 0)])
        assert not any(wall_board.get_tile(x, y).is_mine for x, y in pending)

    def test_numbered_tile_collects_only_itself(self, wall_board: Board) -> None:
        """A numbered seed collects just itself."""
        assert flood_fill(wall_board, [(1, 2)]) == {(1, 2)}

    def test_mine_seed_collects_only_itself(self, wall_board: Board) -> None:
        """A mine seed is collected so the caller can detect the loss."""
        assert flood_fill(wall_board, [(2, 2)]) == {(2, 2)}

    def test_flagged_tile_is_skipped(self, corner_board: Board) -> None:
        """Flagged tiles are neither collected nor expanded."""
        corner_board.get_tile(2, 2).toggle_flag()
        pending = flood_fill(corner_board, [(0, 0)])
        assert (2, 2) not in pending
        assert len(pending) == 23

    def test_flagged_seed_collects_nothing(self, corner_board: Board) -> None:
        corner_board.get_tile(0, 0).toggle_flag()
        assert flood_fill(corner_board, [(0, 0)]) == set()

    def test_revealed_tiles_are_skipped(self, corner_board: Board) -> None:
        """Already revealed tiles are not collected again."""
        corner_board.get_tile(0, 0).reveal()
        assert flood_fill(corner_board, [(0, 0)]) == set()

    def test_multiple_seeds(self, wall_board: Board) -> None:
        """Several seeds merge into one pending set."""
        pending = flood_fill(wall_board, [(0, 0), (4, 4)])
        assert pending == {(x, y) for x in (0, 1, 3, 4) for y in range(5)}

    def test_out_of_bounds_seed_is_ignored(self, corner_board: Board) -> None:
        assert flood_fill(corner_board, [(-1, 0), (5, 5)]) == set()


# ============================================================================
# Chord Tests
# ============================================================================

class TestChordSeeds:
    """Test chord validity and seed selection."""

    def test_hidden_tile_cannot_chord(self, wall_board: Board) -> None:
        """Only revealed tiles can chord."""
        assert chord_seeds(wall_board, 1, 2) is None

    def test_flag_count_mismatch_aborts(self, wall_board: Board) -> None:
        """Too few flags give no chord."""
        wall_board.get_tile(1, 2).reveal()
        wall_board.get_tile(2, 1).toggle_flag()
        assert chord_seeds(wall_board, 1, 2) is None

    def test_too_many_flags_aborts(self, corner_board: Board) -> None:
        """Too many flags give no chord."""
        corner_board.get_tile(3, 3).reveal()
        corner_board.get_tile(4, 4).toggle_flag()
        corner_board.get_tile(2, 2).toggle_flag()
        assert chord_seeds(corner_board, 3, 3) is None

    def test_matching_flags_yield_unflagged_neighbors(
        self, wall_board: Board
    ) -> None:
        """Matching flags yield every hidden, unflagged neighbor."""
        wall_board.get_tile(1, 2).reveal()
        for y in (1, 2, 3):
            wall_board.get_tile(2, y).toggle_flag()
        assert sorted(chord_seeds(wall_board, 1, 2)) == [
            (0, 1), (0, 2), (0, 3), (1, 1), (1, 3),
        ]

    def test_revealed_neighbors_are_not_seeds(self, wall_board: Board) -> None:
        """Revealed neighbors are not chord seeds."""
        wall_board.get_tile(1, 2).reveal()
        wall_board.get_tile(0, 2).reveal()
        for y in (1, 2, 3):
            wall_board.get_tile(2, y).toggle_flag()
        assert (0, 2) not in chord_seeds(wall_board, 1, 2)

    def test_wrong_flags_chord_onto_mine(self, wall_board: Board) -> None:
        """A chord trusts the flags, so a misplaced one exposes a mine."""
        wall_board.get_tile(1, 2).reveal()
        for x, y in ((2, 1), (2, 2), (1, 1)):
            wall_board.get_tile(x, y).toggle_flag()
        seeds = chord_seeds(wall_board, 1, 2)
        assert (2, 3) in seeds
        result = commit(wall_board, flood_fill(wall_board, seeds))
        assert result.hit_mine is True


# ============================================================================
# Commit Tests
# ============================================================================

class TestCommit:
    """Test committing pending reveals."""

    def test_commit_reveals_pending(self, corner_board: Board) -> None:
        """Commit reveals each pending tile and counts them."""
        result = commit(corner_board, {(0, 0), (1, 0)})
        assert sorted(result.revealed) == [(0, 0), (1, 0)]
        assert result.safe_count == 2
        assert result.hit_mine is False
        assert corner_board.get_tile(1, 0).is_revealed is True

    def test_commit_skips_flagged_and_revealed(self, corner_board: Board) -> None:
        """Tiles that changed since collection are skipped."""
        corner_board.get_tile(0, 0).reveal()
        corner_board.get_tile(1, 0).toggle_flag()
        result = commit(corner_board, {(0, 0), (1, 0), (2, 0)})
        assert result.revealed == [(2, 0)]

    def test_commit_reports_mines(self, corner_board: Board) -> None:
        """Committed mines are reported separately from safe tiles."""
        result = commit(corner_board, {(4, 4), (3, 3)})
        assert result.hit_mine is True
        assert result.mines_revealed == 1
        assert result.safe_count == 1

    def test_empty_commit_is_falsy(self, corner_board: Board) -> None:
        """An empty result is falsy."""
        assert not commit(corner_board, set())


# ============================================================================
# Mine Exposure Tests
# ============================================================================

class TestExposeMines:
    """Test revealing every mine after a loss."""

    def test_all_mines_revealed(self, wall_board: Board) -> None:
        """Every mine is revealed and its flag dropped."""
        wall_board.get_tile(2, 0).toggle_flag()
        wall_board.get_tile(2, 4).reveal()
        exposed = expose_mines(wall_board)
        assert sorted(exposed) == [(2, 0), (2, 1), (2, 2), (2, 3)]
        for x, y in WALL:
            tile = wall_board.get_tile(x, y)
            assert tile.is_revealed is True
            assert tile.is_flagged is False

    def test_safe_tiles_untouched(self, wall_board: Board) -> None:
        """Exposing mines leaves safe tiles hidden."""
        expose_mines(wall_board)
        assert wall_board.get_tile(0, 0).is_hidden is True
