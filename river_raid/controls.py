"""
Controls
=========
Key mapping and the input side of the phase machine.

    any key   - start (title screen)
    LEFT/RIGHT - steer
    SPACE     - fire
    P         - pause / resume
    CTRL+C    - quit
"""

import logging
from enum import Enum, auto
from typing import Callable, Tuple

from blessed.keyboard import Keystroke

from .state import Phase, SharedState


logger = logging.getLogger(__name__)

CTRL_C = '\x03'


class Command(Enum):
    """What a key press asks for."""
    QUIT = auto()
    PAUSE = auto()
    LEFT = auto()
    RIGHT = auto()
    FIRE = auto()
    OTHER = auto()


def command_for(key: Keystroke) -> Command:
    """Translate a blessed keystroke into a command."""
    if key.name == 'KEY_LEFT':
        return Command.LEFT
    if key.name == 'KEY_RIGHT':
        return Command.RIGHT
    if key.is_sequence:
        # Newer blessed releases name control characters
        if key.name == 'KEY_CTRL_C':
            return Command.QUIT
        return Command.OTHER

    if str(key) == CTRL_C:
        return Command.QUIT
    if str(key) == ' ':
        return Command.FIRE
    if str(key).lower() == 'p':
        return Command.PAUSE
    return Command.OTHER


class InputHandler:
    """
    Applies key presses to the shared state.

    ``terminal_size`` is called when the game starts to place the player;
    ``playfield_width`` bounds steering.
    """

    def __init__(self, state: SharedState,
                 terminal_size: Callable[[], Tuple[int, int]],
                 playfield_width: int):
        self.state = state
        self.terminal_size = terminal_size
        self.playfield_width = playfield_width

    def process_key(self, key: Keystroke) -> None:
        """Process a single key press from blessed's inkey()."""
        if key is None or not key:
            return
        self.handle(command_for(key))

    def handle(self, command: Command) -> None:
        if command is Command.QUIT:
            self.state.set_phase(Phase.QUIT)
            return

        if command is Command.PAUSE:
            self.state.toggle_pause()
            return

        if self.state.phase is Phase.MAIN:
            self._start()
            return

        # SharedState re-checks PLAYING under the phase lock
        if command is Command.LEFT:
            self.state.move_player(-1, self.playfield_width - 1)
        elif command is Command.RIGHT:
            self.state.move_player(1, self.playfield_width - 1)
        elif command is Command.FIRE:
            self.state.fire()

    def _start(self) -> None:
        width, height = self.terminal_size()
        x = min(width // 2, self.playfield_width - 1)
        # Player must be in place before rendering sees PLAYING
        self.state.place_player(x, height - 1)
        if self.state.transition(Phase.MAIN, Phase.PLAYING):
            logger.info('Game started with player at (%d, %d)', x, height - 1)
