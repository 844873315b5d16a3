import collections
import random
import time

import pytest
from blessed.keyboard import Keystroke

from river_raid.config import GameConfig
from river_raid.scene import Scene
from river_raid.terrain import parse_design


class FakeTerm:
    """Stands in for blessed's Terminal when building output strings."""
    normal = ''
    home = ''
    clear = ''

    def move_xy(self, x, y):
        return f'<{x},{y}>'

    def color(self, n):
        return ''

    def on_color(self, n):
        return ''


class FakeDriver:
    """Terminal driver with a fixed size and a scripted key queue."""

    def __init__(self, width=80, height=24, keys=()):
        self.width = width
        self.height = height
        self.term = FakeTerm()
        self.keys = collections.deque(keys)
        self.output = []
        self.clears = 0

    def size(self):
        return self.width, self.height

    def poll_key(self, timeout):
        if self.keys:
            key = self.keys.popleft()
            return key if isinstance(key, Keystroke) else Keystroke(key)
        time.sleep(min(timeout, 0.01))
        return None

    def write(self, text):
        self.output.append(text)

    def clear(self):
        self.clears += 1


def make_scene(text, width=80, seed=0):
    return Scene.from_design(parse_design(text), width, random.Random(seed))


@pytest.fixture
def fast_config():
    return GameConfig(
        tick_interval=0.001,
        render_interval=0.001,
        poll_timeout=0.001,
        motion_interval=0.001,
    )


@pytest.fixture
def river_scene():
    """A straight enemy-free river, columns 24-55 of 80."""
    return make_scene('30 40 30 0 0 60')
