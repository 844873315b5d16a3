#!/usr/bin/env python3
"""
River Raid - Terminal River Combat
===================================
Fly up a scrolling river, dodge the banks and shoot down what's ahead.

Controls:
    Any key     - Start
    LEFT/RIGHT  - Steer
    SPACE       - Fire
    P           - Pause
    CTRL+C      - Quit
"""

import logging
import sys

try:
    from blessed import Terminal
except ImportError:
    print("ERROR: 'blessed' library required. Install with: pip install blessed")
    sys.exit(1)

from .config import GameConfig
from .errors import RiverRaidError
from .game import Game
from .logging_config import setup_logging
from .scene import Scene
from .terminal import TerminalDriver
from .terrain import load_design


logger = logging.getLogger(__name__)


def main():
    """Entry point. Builds the scene and runs the game until CTRL+C."""
    config = GameConfig.from_env()
    setup_logging(config.log_level, config.log_file)

    driver = TerminalDriver(Terminal())

    try:
        designs = load_design(config.design_path)
        width, _ = driver.size()
        scene = Scene.from_design(designs, width)
        game = Game(scene, driver, config)

        with driver.session():
            game.run()
    except RiverRaidError as exc:
        logger.error('Fatal: %s', exc)
        print(f'river-raid: {exc}', file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info('Interrupted')

    sys.exit(0)


if __name__ == '__main__':
    main()
