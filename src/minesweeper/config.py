"""
Configuration for Minesweeper games.

Holds board dimensions, difficulty presets and the lookup that turns a
difficulty tag plus optional overrides into a validated BoardConfig.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union


class ConfigurationError(ValueError):
    """Raised when a board configuration can never produce a playable game."""


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Boards meant for play should have at least ``num_mines + 9`` tiles so
    the first click's 3x3 neighborhood can always stay mine-free. Smaller
    boards are accepted as long as a corner click leaves room for every
    mine; placement then checks the actual safe zone.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ConfigurationError("Number of mines cannot be negative")
        max_mines = self.total_tiles - self.min_safe_zone
        if self.num_mines > max_mines:
            raise ConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_tiles(self) -> int:
        """Number of tiles on the board."""
        return self.width * self.height

    @property
    def safe_tiles(self) -> int:
        """Number of tiles without a mine."""
        return self.total_tiles - self.num_mines

    @property
    def min_safe_zone(self) -> int:
        """Smallest clipped first-click neighborhood, found at a corner."""
        return min(self.width, 2) * min(self.height, 2)


# ============================================================================
# Difficulty Presets
# ============================================================================

class Difficulty(str, Enum):
    """Difficulty tags understood by the game controller."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

DIFFICULTY_SETUP: Mapping[Difficulty, BoardConfig] = MappingProxyType({
    Difficulty.EASY: BEGINNER,
    Difficulty.MEDIUM: INTERMEDIATE,
    Difficulty.HARD: EXPERT,
})

DifficultyLike = Union[Difficulty, str]
OverrideValue = Union[BoardConfig, Mapping[str, Any]]


def parse_difficulty(difficulty: DifficultyLike) -> Difficulty:
    """
    Convert a difficulty tag to a Difficulty member.

    Raises:
        ConfigurationError: If the tag is not a known difficulty.
    """
    try:
        return Difficulty(difficulty)
    except ValueError:
        choices = ", ".join(d.value for d in Difficulty)
        raise ConfigurationError(
            f"Unknown difficulty {difficulty!r} (expected one of: {choices})"
        ) from None


def resolve_config(
    difficulty: DifficultyLike,
    overrides: Optional[Mapping[DifficultyLike, OverrideValue]] = None,
) -> BoardConfig:
    """
    Look up the board configuration for a difficulty.

    Args:
        difficulty: Difficulty tag, as enum member or string.
        overrides: Optional mapping from difficulty to a BoardConfig or a
            mapping with ``width``, ``height`` and ``num_mines`` keys. Entries
            here take precedence over DIFFICULTY_SETUP.

    Returns:
        Validated board configuration.

    Raises:
        ConfigurationError: If the difficulty is unknown or the override
            is malformed.
    """
    level = parse_difficulty(difficulty)
    if overrides:
        for key, value in overrides.items():
            if parse_difficulty(key) == level:
                return _coerce_config(value)
    return DIFFICULTY_SETUP[level]


def _coerce_config(value: OverrideValue) -> BoardConfig:
    """Build a BoardConfig from an override entry."""
    if isinstance(value, BoardConfig):
        return value
    try:
        return BoardConfig(
            width=int(value["width"]),
            height=int(value["height"]),
            num_mines=int(value["num_mines"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Invalid difficulty override {value!r}: {exc}"
        ) from exc
