"""
Terminal Driver
================
The only place that talks to the real terminal.

Everything the game needs from the terminal goes through ``TerminalDriver``:
its size, the next key press, and writing escape sequences. Failures
surface as ``TerminalError`` and are never retried.
"""

import contextlib
import logging
import sys
from typing import Iterator, Optional, TextIO, Tuple

from blessed import Terminal
from blessed.keyboard import Keystroke

from .errors import TerminalError


logger = logging.getLogger(__name__)


class TerminalDriver:
    """Thin wrapper around a blessed ``Terminal``."""

    def __init__(self, term: Optional[Terminal] = None, stream: Optional[TextIO] = None):
        self.term = term if term is not None else Terminal()
        self._stream = stream if stream is not None else sys.stdout

    def size(self) -> Tuple[int, int]:
        """Current terminal size as (columns, rows)."""
        try:
            return self.term.width, self.term.height
        except OSError as exc:
            raise TerminalError(f'cannot read terminal size: {exc}') from exc

    def poll_key(self, timeout: float) -> Optional[Keystroke]:
        """Wait up to ``timeout`` seconds for a key press."""
        try:
            key = self.term.inkey(timeout=timeout)
        except OSError as exc:
            raise TerminalError(f'cannot read key event: {exc}') from exc
        return key if key else None

    def write(self, text: str) -> None:
        if not text:
            return
        try:
            self._stream.write(text)
            self._stream.flush()
        except OSError as exc:
            raise TerminalError(f'cannot write to terminal: {exc}') from exc

    def clear(self) -> None:
        self.write(self.term.home + self.term.clear)

    @contextlib.contextmanager
    def session(self) -> Iterator['TerminalDriver']:
        """
        Fullscreen, raw mode and hidden cursor for the life of the game.

        Raw mode delivers Ctrl+C as a key press instead of a signal.
        """
        with self.term.fullscreen(), self.term.raw(), self.term.hidden_cursor():
            logger.debug('Terminal session started at %dx%d', *self.size())
            try:
                yield self
            finally:
                self.write(self.term.normal)
