"""
Board module for Minesweeper game.

Implements the tile grid with bounds checks, neighbor lookups,
mine placement and adjacency counting. Game rules live in the controller.
"""
import random
from typing import Iterator, List, Optional, Protocol, Set, Tuple

import numpy as np

from .config import BoardConfig, ConfigurationError
from .tile import Tile, TileView

Position = Tuple[int, int]


class RandomSource(Protocol):
    """Anything that can pick a random integer in ``range(stop)``."""

    def randrange(self, stop: int) -> int:
        ...


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper tile grid.

    Tiles are addressed as ``(x, y)`` with ``0 <= x < width`` and
    ``0 <= y < height``; storage is row-major so lookups are O(1).
    """

    def __init__(self, config: Optional[BoardConfig] = None) -> None:
        self.config = config or BoardConfig()
        self._grid: List[List[Tile]] = []
        self._init_grid()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of tiles."""
        self._grid = [
            [Tile() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring tile positions.

        Args:
            x: Column index of center tile.
            y: Row index of center tile.

        Returns:
            List of (x, y) tuples for the up-to-8 in-bounds neighbors.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def neighborhood(self, x: int, y: int) -> Set[Position]:
        """The 3x3 block centered on (x, y), clipped to the board."""
        return set(self.neighbors(x, y)) | {(x, y)}

    # ========================================================================
    # Mine Placement
    # ========================================================================

    def place_mines(
        self,
        safe_x: int,
        safe_y: int,
        rng: Optional[RandomSource] = None,
    ) -> None:
        """
        Place mines randomly, keeping the first click's neighborhood clear.

        Positions are sampled uniformly over the whole board and rejected
        when already mined or inside the exclusion zone, until exactly
        ``num_mines`` mines are down. Adjacent counts are computed once
        afterwards.

        Args:
            safe_x: Column of the first revealed tile.
            safe_y: Row of the first revealed tile.
            rng: Random source; defaults to the ``random`` module.

        Raises:
            ConfigurationError: If fewer tiles lie outside the exclusion
                zone than there are mines to place.
        """
        rng = rng or random
        excluded = self.neighborhood(safe_x, safe_y)
        usable = self.config.total_tiles - len(excluded)
        if self.config.num_mines > usable:
            raise ConfigurationError(
                f"Cannot place {self.config.num_mines} mines: only {usable} "
                f"tiles lie outside the first click's neighborhood"
            )

        placed = 0
        while placed < self.config.num_mines:
            x = rng.randrange(self.config.width)
            y = rng.randrange(self.config.height)
            tile = self._grid[y][x]
            if tile.is_mine or (x, y) in excluded:
                continue
            tile.is_mine = True
            placed += 1

        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all tiles."""
        for y in range(self.config.height):
            for x in range(self.config.width):
                if not self._grid[y][x].is_mine:
                    self._grid[y][x].mine_count = self._count_adjacent_mines(x, y)

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific tile."""
        count = 0
        for neighbor_x, neighbor_y in self.neighbors(x, y):
            if self._grid[neighbor_y][neighbor_x].is_mine:
                count += 1
        return count

    # ========================================================================
    # Accessors
    # ========================================================================

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        """Get tile at position, or None if out of bounds."""
        if not self.is_valid_position(x, y):
            return None
        return self._grid[y][x]

    def positions(self) -> Iterator[Position]:
        """Iterate over every (x, y) on the board in row-major order."""
        for y in range(self.config.height):
            for x in range(self.config.width):
                yield x, y

    def tiles(self) -> Iterator[Tuple[Position, Tile]]:
        """Iterate over ((x, y), tile) pairs in row-major order."""
        for x, y in self.positions():
            yield (x, y), self._grid[y][x]

    def mine_positions(self) -> List[Position]:
        """Positions of every mine on the board."""
        return [position for position, tile in self.tiles() if tile.is_mine]

    def snapshot(self) -> List[List[TileView]]:
        """Row-major grid of read-only tile views."""
        return [[tile.to_view() for tile in row] for row in self._grid]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for y in range(self.config.height):
            for x in range(self.config.width):
                obs[y, x] = self._grid[y][x].to_observation()
        return obs

    def get_hidden_positions(self) -> List[Position]:
        """Positions of tiles that are neither revealed nor flagged."""
        return [position for position, tile in self.tiles() if tile.is_hidden]
