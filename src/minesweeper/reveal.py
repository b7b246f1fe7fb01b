"""
Reveal engine for Minesweeper.

Flood fill collects the tiles a reveal uncovers; chord reveal turns a
click on a satisfied number into flood-fill seeds for its neighbors.
Neither touches game state: the controller commits the result.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional, Set

from .board import Board, Position


# ============================================================================
# Reveal Result
# ============================================================================

@dataclass
class RevealResult:
    """
    Outcome of one committed reveal.

    Attributes:
        revealed: Positions uncovered by this reveal, mines included.
        mines_revealed: How many uncovered tiles were mines.
        chorded: Whether the reveal came from a chord on a number.
    """

    revealed: List[Position] = field(default_factory=list)
    mines_revealed: int = 0
    chorded: bool = False

    @property
    def hit_mine(self) -> bool:
        """Whether any uncovered tile was a mine."""
        return self.mines_revealed > 0

    @property
    def safe_count(self) -> int:
        """Number of uncovered tiles that were not mines."""
        return len(self.revealed) - self.mines_revealed

    def __bool__(self) -> bool:
        return bool(self.revealed)


# ============================================================================
# Flood Fill
# ============================================================================

def flood_fill(board: Board, seeds: Iterable[Position]) -> Set[Position]:
    """
    Collect every tile uncovered by revealing the given seeds.

    Revealed and flagged tiles are skipped. A collected tile expands to
    its neighbors only when it is not a mine and has no adjacent mines,
    so the result is the zero-count region reachable from the seeds
    plus its numbered border.

    Args:
        board: Board to inspect.
        seeds: Starting positions.

    Returns:
        Positions pending reveal.
    """
    frontier: Deque[Position] = deque()
    visited: Set[Position] = set()
    pending: Set[Position] = set()

    for seed in seeds:
        if seed not in visited:
            visited.add(seed)
            frontier.append(seed)

    while frontier:
        x, y = frontier.popleft()
        tile = board.get_tile(x, y)
        if tile is None or not tile.is_hidden:
            continue

        pending.add((x, y))
        if tile.is_mine or tile.mine_count > 0:
            continue

        for neighbor in board.neighbors(x, y):
            if neighbor not in visited:
                visited.add(neighbor)
                frontier.append(neighbor)

    return pending


# ============================================================================
# Chord Reveal
# ============================================================================

def chord_seeds(board: Board, x: int, y: int) -> Optional[List[Position]]:
    """
    Seeds for a chord on the revealed tile at (x, y).

    Args:
        board: Board to inspect.
        x: Column of the revealed tile.
        y: Row of the revealed tile.

    Returns:
        Unflagged hidden neighbors when the number of flagged neighbors
        equals the tile's mine count, otherwise None.
    """
    tile = board.get_tile(x, y)
    if tile is None or not tile.is_revealed:
        return None

    flagged: List[Position] = []
    unflagged: List[Position] = []
    for nx, ny in board.neighbors(x, y):
        neighbor = board.get_tile(nx, ny)
        if neighbor.is_flagged:
            flagged.append((nx, ny))
        elif neighbor.is_hidden:
            unflagged.append((nx, ny))

    if len(flagged) != tile.mine_count:
        return None
    return unflagged


# ============================================================================
# Commit
# ============================================================================

def commit(board: Board, pending: Iterable[Position]) -> RevealResult:
    """Reveal every pending tile that is still hidden."""
    result = RevealResult()
    for x, y in sorted(pending, key=lambda p: (p[1], p[0])):
        tile = board.get_tile(x, y)
        if tile is None or not tile.reveal():
            continue
        result.revealed.append((x, y))
        if tile.is_mine:
            result.mines_revealed += 1
    return result


def expose_mines(board: Board) -> List[Position]:
    """Reveal every mine, dropping flags on them. Returns the new reveals."""
    exposed = []
    for position, tile in board.tiles():
        if tile.is_mine and tile.expose():
            exposed.append(position)
    return exposed
