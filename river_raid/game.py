"""
Game Coordinator
=================
Runs the game: three worker threads plus the render loop.

    ticker    advances the frame counter every tick while playing
    input     polls the terminal for keys and applies them
    motion    moves every projectile up one row per motion step
    render    (main thread) draws the current phase and runs collisions

Workers share state only through ``SharedState``. A worker that fails
switches the game to QUIT so every loop winds down; the error is then
re-raised from ``run()`` on the main thread.
"""

import logging
import threading
import time
from typing import List, Optional, Tuple

from .collision import player_crashed, sweep_projectiles
from .config import GameConfig
from .controls import InputHandler
from .engine import GameRenderer
from .errors import SceneError, TerminalError
from .scene import Scene
from .state import Phase, SharedState
from .terminal import TerminalDriver


logger = logging.getLogger(__name__)


class Game:
    """Owns the scene, the shared state and the threads that drive them."""

    def __init__(self, scene: Scene, driver: TerminalDriver,
                 config: Optional[GameConfig] = None,
                 state: Optional[SharedState] = None):
        self.scene = scene
        self.driver = driver
        self.config = config if config is not None else GameConfig()
        self.state = state if state is not None else SharedState()

        width, height = driver.size()
        self._check_size(width, height)
        self.renderer = GameRenderer(width, height)
        self.input_handler = InputHandler(
            self.state, driver.size, min(width, scene.width)
        )

        self._threads: List[threading.Thread] = []
        self._failure: Optional[BaseException] = None
        self._failure_lock = threading.Lock()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def run(self) -> None:
        """Start the workers, render until QUIT, then join everything."""
        self._threads = [
            self._spawn('ticker', self._ticker_loop),
            self._spawn('input', self._input_loop),
            self._spawn('motion', self._motion_loop),
        ]

        self.driver.clear()
        try:
            self._render_loop()
        except BaseException as exc:
            self._fail(exc)
        finally:
            self.state.set_phase(Phase.QUIT)
            for thread in self._threads:
                thread.join()

        if self._failure is not None:
            raise self._failure
        logger.info('Game finished after %d frames', self.state.frame)

    def _spawn(self, name: str, target) -> threading.Thread:
        thread = threading.Thread(
            target=self._guard, args=(target,), name=name, daemon=True
        )
        thread.start()
        return thread

    def _guard(self, target) -> None:
        try:
            target()
        except Exception as exc:
            logger.exception('%s thread failed', threading.current_thread().name)
            self._fail(exc)

    def _fail(self, exc: BaseException) -> None:
        with self._failure_lock:
            if self._failure is None:
                self._failure = exc
        self.state.set_phase(Phase.QUIT)

    # =========================================================================
    # WORKERS
    # =========================================================================

    def _ticker_loop(self) -> None:
        while True:
            time.sleep(self.config.tick_interval)
            phase = self.state.phase
            if phase is Phase.QUIT:
                break
            if phase is Phase.PLAYING:
                self.state.advance_frame()

    def _input_loop(self) -> None:
        while not self.state.quitting:
            key = self.driver.poll_key(self.config.poll_timeout)
            if key is not None:
                self.input_handler.process_key(key)

    def _motion_loop(self) -> None:
        while True:
            time.sleep(self.config.motion_interval)
            phase = self.state.phase
            if phase is Phase.QUIT:
                break
            if phase is Phase.PLAYING:
                self.state.advance_projectiles()

    # =========================================================================
    # RENDERING
    # =========================================================================

    def _render_loop(self) -> None:
        while True:
            time.sleep(self.config.render_interval)
            phase = self.state.phase
            if phase is Phase.QUIT:
                break
            self.render(phase)

    def render(self, phase: Phase) -> None:
        """Draw one frame for ``phase``."""
        self._sync_size()
        self.renderer.begin_frame()

        if phase is Phase.MAIN:
            self.renderer.draw_title()
        elif phase is Phase.PLAYING:
            self.render_playing()
        elif phase is Phase.PAUSED:
            self._draw_playfield(
                self._window(), self.state.projectiles(), self.state.player_position()
            )
            self.renderer.draw_paused_banner()
        elif phase is Phase.GAME_OVER:
            self.renderer.draw_game_over(self.state.frame, self.state.enemies_destroyed)

        self.driver.write(self.renderer.end_frame(self.driver.term))

    def render_playing(self) -> None:
        """
        One playing pass: collisions, drawing, then the crash check.

        Hits are resolved before the terrain is drawn, so a destroyed enemy
        already shows as river on the frame it dies.
        """
        window = self._window()

        result = self.state.resolve_projectiles(
            lambda live: sweep_projectiles(live, self.scene, window)
        )
        if result.removed:
            logger.debug('%d projectiles removed, %d enemies destroyed',
                         len(result.removed), result.destroyed)
        x, y = self.state.player_position()
        self._draw_playfield(window, [(p.x, p.y) for p in result.drawn], (x, y))

        if player_crashed(self.scene, window, x, y):
            logger.info('Player crashed at (%d, %d) on frame %d', x, y, self.state.frame)
            self.state.transition(Phase.PLAYING, Phase.GAME_OVER)

    def _window(self) -> List[int]:
        """Visible scene rows, nearest row at the bottom of the screen."""
        window = self.scene.window_indices(self.state.frame, self.renderer.height)
        window.reverse()
        return window

    def _draw_playfield(self, window: List[int], projectiles,
                        player: Tuple[int, int]) -> None:
        self.renderer.draw_scene(self.scene, window)
        self.renderer.draw_projectiles(projectiles)
        self.renderer.draw_player(*player)

    def _sync_size(self) -> None:
        width, height = self.driver.size()
        if (width, height) == (self.renderer.width, self.renderer.height):
            return
        self._check_size(width, height)
        logger.info('Terminal resized to %dx%d', width, height)
        self.renderer.resize(width, height)
        self.input_handler.playfield_width = min(width, self.scene.width)

        # Keep the player inside the new screen
        x, y = self.state.player_position()
        self.state.place_player(
            min(x, self.input_handler.playfield_width - 1), min(y, height - 1)
        )
        self.driver.clear()

    def _check_size(self, width: int, height: int) -> None:
        if width < self.config.min_width or height < self.config.min_height:
            raise TerminalError(
                f'terminal too small: {width}x{height}, '
                f'minimum {self.config.min_width}x{self.config.min_height}'
            )
        if height + 1 > len(self.scene):
            raise SceneError(
                f'scene has {len(self.scene)} rows, '
                f'terminal needs at least {height + 1}'
            )
