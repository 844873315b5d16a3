"""
Game State
===========
The phase machine and every piece of state shared between threads.

``SharedState`` gives each field its own lock: phase, frame counter, player,
projectiles. Most methods take exactly one lock. Play input (steering and
firing) holds the phase lock while it touches the player and projectiles,
so it can never land after the phase has left PLAYING. Locks are always
taken in the order phase, player, projectiles, which keeps the threads
from deadlocking. There is no combined snapshot: reading the phase and
then the frame is two separate observations.
"""

import logging
import threading
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple, TypeVar

from .entities import Player, Projectile, motion_step, spawn_projectile


logger = logging.getLogger(__name__)

R = TypeVar('R')


class Phase(Enum):
    """Game phases."""
    MAIN = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()
    QUIT = auto()


class SharedState:
    """Thread-safe container for the mutable game state."""

    def __init__(self):
        self._phase_lock = threading.Lock()
        self._phase = Phase.MAIN

        self._frame_lock = threading.Lock()
        self._frame = 0

        self._player_lock = threading.Lock()
        self._player = Player()

        # Also guards the score
        self._projectile_lock = threading.Lock()
        self._projectiles: List[Projectile] = []
        self._enemies_destroyed = 0

    # -------------------------------------------------------------------------
    # Phase
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        with self._phase_lock:
            return self._phase

    def set_phase(self, phase: Phase) -> None:
        """Force a phase. Only QUIT is entered unconditionally."""
        with self._phase_lock:
            previous, self._phase = self._phase, phase
        if previous is not phase:
            logger.info('Phase %s -> %s', previous.name, phase.name)

    def transition(self, expected: Phase, new: Phase) -> bool:
        """Move to ``new`` only if the phase is still ``expected``."""
        with self._phase_lock:
            if self._phase is not expected:
                return False
            self._phase = new
        logger.info('Phase %s -> %s', expected.name, new.name)
        return True

    def toggle_pause(self) -> Optional[Phase]:
        """Swap PLAYING and PAUSED. Returns the new phase, or None."""
        with self._phase_lock:
            if self._phase is Phase.PLAYING:
                self._phase = Phase.PAUSED
            elif self._phase is Phase.PAUSED:
                self._phase = Phase.PLAYING
            else:
                return None
            phase = self._phase
        logger.info('Phase -> %s', phase.name)
        return phase

    @property
    def quitting(self) -> bool:
        return self.phase is Phase.QUIT

    # -------------------------------------------------------------------------
    # Frame counter
    # -------------------------------------------------------------------------

    @property
    def frame(self) -> int:
        with self._frame_lock:
            return self._frame

    def advance_frame(self) -> int:
        with self._frame_lock:
            self._frame += 1
            return self._frame

    # -------------------------------------------------------------------------
    # Player
    # -------------------------------------------------------------------------

    def player_position(self) -> Tuple[int, int]:
        with self._player_lock:
            return self._player.x, self._player.y

    def place_player(self, x: int, y: int) -> None:
        with self._player_lock:
            self._player.x = x
            self._player.y = y

    def move_player(self, dx: int, max_x: int) -> Optional[int]:
        """
        Shift the player sideways, clamped to ``[0, max_x]``.

        Only while PLAYING; returns the new x, or None if nothing moved.
        """
        with self._phase_lock:
            if self._phase is not Phase.PLAYING:
                return None
            with self._player_lock:
                self._player.x = min(max(self._player.x + dx, 0), max_x)
                return self._player.x

    # -------------------------------------------------------------------------
    # Projectiles
    # -------------------------------------------------------------------------

    def fire(self) -> Optional[Projectile]:
        """Launch a projectile from the cell above the player while PLAYING."""
        with self._phase_lock:
            if self._phase is not Phase.PLAYING:
                return None
            with self._player_lock:
                x, y = self._player.x, self._player.y
            if y <= 0:
                return None
            projectile = spawn_projectile(x, y - 1)
            with self._projectile_lock:
                self._projectiles.append(projectile)
        logger.debug('Projectile %d fired at (%d, %d)',
                     projectile.id, projectile.x, projectile.y)
        return projectile

    def projectiles(self) -> List[Tuple[int, int]]:
        """Positions of the live projectiles."""
        with self._projectile_lock:
            return [(p.x, p.y) for p in self._projectiles]

    def advance_projectiles(self) -> None:
        with self._projectile_lock:
            motion_step(self._projectiles)

    def resolve_projectiles(self, resolver: Callable[[List[Projectile]], R]) -> R:
        """
        Run a collision sweep over the live projectiles.

        ``resolver`` receives the live list and returns a result with
        ``survivors`` and ``destroyed``; the survivors replace the list and
        ``destroyed`` is added to the score.
        """
        with self._projectile_lock:
            result = resolver(self._projectiles)
            self._projectiles = list(result.survivors)
            self._enemies_destroyed += result.destroyed
        return result

    @property
    def enemies_destroyed(self) -> int:
        with self._projectile_lock:
            return self._enemies_destroyed
