"""
Audio collaborators for the game controller.

The controller only knows the AudioService interface; actual playback is
supplied by the front-end. Cue names are plain strings.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

EXPLOSION_CUE = "explosion"

# Seconds after the first explosion at which the follow-up burst plays.
EXPLOSION_BURST_DELAYS = (0.15, 0.3, 0.45)


# ============================================================================
# Audio Service Interface
# ============================================================================

class AudioService(ABC):
    """Fire-and-forget sound playback."""

    @abstractmethod
    def play(self, cue: str) -> None:
        """
        Play a sound cue.

        Args:
            cue: Name of the cue to play.
        """
        pass


class SilentAudio(AudioService):
    """Audio service that plays nothing."""

    def play(self, cue: str) -> None:
        pass


# ============================================================================
# Audio Manager
# ============================================================================

SoundPlayer = Callable[[float], None]


class AudioManager(AudioService):
    """
    Registry of named sound players.

    A player is any callable taking the volume (0.0 to 1.0) to play at.
    Playing a cue that was never loaded logs a warning and does nothing.
    """

    def __init__(self, volume: float = 1.0) -> None:
        self._sounds: Dict[str, SoundPlayer] = {}
        self._volume = _clamp(volume)
        self._muted = False

    def load(self, cue: str, player: SoundPlayer) -> None:
        """Register (or replace) the player for a cue."""
        self._sounds[cue] = player

    def unload(self, cue: str) -> None:
        """Forget a cue."""
        if self._sounds.pop(cue, None) is None:
            logger.warning('Sound with id "%s" not found', cue)

    def unload_all(self) -> None:
        self._sounds.clear()

    def play(self, cue: str) -> None:
        player = self._sounds.get(cue)
        if player is None:
            logger.warning('Sound with id "%s" not found', cue)
            return
        if self._muted:
            return
        player(self._volume)

    def is_loaded(self, cue: str) -> bool:
        return cue in self._sounds

    @property
    def loaded_sounds(self) -> List[str]:
        return list(self._sounds)

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = _clamp(value)

    def mute(self) -> None:
        self._muted = True

    def unmute(self) -> None:
        self._muted = False

    @property
    def is_muted(self) -> bool:
        return self._muted


def _clamp(volume: float) -> float:
    return max(0.0, min(1.0, volume))
