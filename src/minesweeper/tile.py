"""
Tile module for Minesweeper game.

Represents individual tiles on the game board with their visual state
(hidden/revealed/flagged) and content (mine/number).
"""
from dataclasses import dataclass
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class TileState(Enum):
    """Possible visual states of a tile."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass
class Tile:
    """
    Represents a single tile in the Minesweeper grid.

    A tile holds exactly one visual state, so it can never be flagged
    and revealed at the same time.

    Attributes:
        is_mine: Whether this tile contains a mine.
        mine_count: Count of mines in neighboring tiles (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    mine_count: int = 0
    state: TileState = TileState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this tile.

        Returns:
            True if tile was revealed, False if already revealed or flagged.
        """
        if self.state != TileState.HIDDEN:
            return False
        self.state = TileState.REVEALED
        return True

    def expose(self) -> bool:
        """
        Reveal this tile even when flagged.

        Used when a lost game uncovers every mine for inspection.

        Returns:
            True if the tile changed state.
        """
        if self.state == TileState.REVEALED:
            return False
        self.state = TileState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this tile.

        Returns:
            True if flag was toggled, False if tile is revealed.
        """
        if self.state == TileState.REVEALED:
            return False
        if self.state == TileState.HIDDEN:
            self.state = TileState.FLAGGED
        else:
            self.state = TileState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if tile is hidden."""
        return self.state == TileState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if tile is revealed."""
        return self.state == TileState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if tile is flagged."""
        return self.state == TileState.FLAGGED

    def to_view(self) -> "TileView":
        """Snapshot this tile for presentation."""
        return TileView(
            is_mine=self.is_mine,
            is_revealed=self.is_revealed,
            is_flagged=self.is_flagged,
            mine_count=self.mine_count,
        )

    def to_observation(self) -> int:
        """
        Convert tile to a single observation value.

        Returns:
            -1: Hidden tile
            -2: Flagged tile
            0-8: Revealed tile with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == TileState.HIDDEN:
            return -1
        if self.state == TileState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.mine_count


@dataclass(frozen=True)
class TileView:
    """Read-only tile snapshot handed to board observers."""

    is_mine: bool
    is_revealed: bool
    is_flagged: bool
    mine_count: int
