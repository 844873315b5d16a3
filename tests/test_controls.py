import pytest
from blessed.keyboard import Keystroke

from river_raid.controls import Command, InputHandler, command_for
from river_raid.state import Phase, SharedState


LEFT = Keystroke('\x1b[D', code=260, name='KEY_LEFT')
RIGHT = Keystroke('\x1b[C', code=261, name='KEY_RIGHT')


@pytest.mark.parametrize('key, command', [
    (Keystroke('\x03'), Command.QUIT),
    (Keystroke('p'), Command.PAUSE),
    (Keystroke('P'), Command.PAUSE),
    (Keystroke(' '), Command.FIRE),
    (LEFT, Command.LEFT),
    (RIGHT, Command.RIGHT),
    (Keystroke('x'), Command.OTHER),
    (Keystroke('\x1b[A', code=259, name='KEY_UP'), Command.OTHER),
])
def test_command_for(key, command):
    assert command_for(key) is command


@pytest.fixture
def handler():
    return InputHandler(SharedState(), lambda: (80, 24), playfield_width=80)


def test_any_key_starts_the_game(handler):
    handler.process_key(Keystroke('x'))
    assert handler.state.phase is Phase.PLAYING
    assert handler.state.player_position() == (40, 23)


def test_arrow_key_also_starts(handler):
    handler.process_key(LEFT)
    assert handler.state.phase is Phase.PLAYING
    assert handler.state.player_position() == (40, 23)


def test_pause_key_does_not_start(handler):
    handler.process_key(Keystroke('p'))
    assert handler.state.phase is Phase.MAIN


def test_steering_and_firing(handler):
    handler.process_key(Keystroke('x'))
    handler.process_key(LEFT)
    handler.process_key(LEFT)
    handler.process_key(RIGHT)
    assert handler.state.player_position() == (39, 23)

    handler.process_key(Keystroke(' '))
    assert handler.state.projectiles() == [(39, 22)]


def test_steering_stops_at_playfield_edge():
    handler = InputHandler(SharedState(), lambda: (80, 24), playfield_width=42)
    handler.process_key(Keystroke('x'))
    assert handler.state.player_position() == (40, 23)
    for _ in range(5):
        handler.process_key(RIGHT)
    assert handler.state.player_position() == (41, 23)


def test_paused_ignores_steering(handler):
    handler.process_key(Keystroke('x'))
    handler.process_key(Keystroke('p'))
    assert handler.state.phase is Phase.PAUSED

    handler.process_key(LEFT)
    handler.process_key(Keystroke(' '))
    assert handler.state.player_position() == (40, 23)
    assert handler.state.projectiles() == []

    handler.process_key(Keystroke('p'))
    assert handler.state.phase is Phase.PLAYING


def test_game_over_ignores_play_input(handler):
    handler.process_key(Keystroke('x'))
    handler.state.transition(Phase.PLAYING, Phase.GAME_OVER)

    handler.process_key(LEFT)
    handler.process_key(Keystroke(' '))
    handler.process_key(Keystroke('p'))

    assert handler.state.phase is Phase.GAME_OVER
    assert handler.state.player_position() == (40, 23)
    assert handler.state.projectiles() == []


@pytest.mark.parametrize('phase', list(Phase))
def test_ctrl_c_quits_from_any_phase(handler, phase):
    handler.state.set_phase(phase)
    handler.process_key(Keystroke('\x03'))
    assert handler.state.phase is Phase.QUIT


def test_empty_keystroke_is_ignored(handler):
    handler.process_key(Keystroke(''))
    assert handler.state.phase is Phase.MAIN


class PhaseChangesAfterRead(SharedState):
    """Another thread changes the phase right after input has read it."""

    def __init__(self, next_phase):
        super().__init__()
        self.next_phase = next_phase

    @property
    def phase(self):
        seen = SharedState.phase.fget(self)
        if seen is Phase.PLAYING and self.next_phase is not None:
            self.set_phase(self.next_phase)
            self.next_phase = None
        return seen


@pytest.mark.parametrize('next_phase', [Phase.GAME_OVER, Phase.PAUSED])
@pytest.mark.parametrize('key', [Keystroke(' '), LEFT, RIGHT])
def test_play_input_racing_a_phase_change_is_dropped(next_phase, key):
    state = PhaseChangesAfterRead(next_phase)
    state.place_player(40, 23)
    state.transition(Phase.MAIN, Phase.PLAYING)
    handler = InputHandler(state, lambda: (80, 24), playfield_width=80)

    handler.process_key(key)

    assert state.phase is next_phase
    assert state.player_position() == (40, 23)
    assert state.projectiles() == []
