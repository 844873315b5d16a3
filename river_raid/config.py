"""
Configuration
==============
Timing constants, terminal limits and file locations.

Everything can be used as-is; ``GameConfig.from_env()`` lets the design file
and the log destination be overridden without command-line flags:

    RIVER_RAID_DESIGN     path to a scene design file
    RIVER_RAID_LOG        path of a log file (logging is off otherwise)
    RIVER_RAID_LOG_LEVEL  DEBUG, INFO, WARNING...
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


# =============================================================================
# TIMING (seconds)
# =============================================================================

TICK_INTERVAL = 0.1
RENDER_INTERVAL = 0.1
POLL_TIMEOUT = 0.25
MOTION_INTERVAL = 0.02

# Smallest playable terminal
MIN_WIDTH = 20
MIN_HEIGHT = 10


def get_resource_path(relative_path: str) -> str:
    """Resolve a file shipped inside the package."""
    return str(Path(__file__).parent / relative_path)


DEFAULT_DESIGN_PATH = get_resource_path('scene.design')


@dataclass
class GameConfig:
    """Runtime settings for one game session."""
    design_path: str = DEFAULT_DESIGN_PATH
    log_file: Optional[str] = None
    log_level: int = logging.INFO
    tick_interval: float = TICK_INTERVAL
    render_interval: float = RENDER_INTERVAL
    poll_timeout: float = POLL_TIMEOUT
    motion_interval: float = MOTION_INTERVAL
    min_width: int = MIN_WIDTH
    min_height: int = MIN_HEIGHT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'GameConfig':
        """Build a config from environment variables."""
        if environ is None:
            environ = os.environ

        config = cls()
        if environ.get('RIVER_RAID_DESIGN'):
            config.design_path = environ['RIVER_RAID_DESIGN']
        if environ.get('RIVER_RAID_LOG'):
            config.log_file = environ['RIVER_RAID_LOG']

        level_name = environ.get('RIVER_RAID_LOG_LEVEL', '').upper()
        if level_name:
            level = logging.getLevelName(level_name)
            # getLevelName returns a string for unknown names
            if isinstance(level, int):
                config.log_level = level
        return config
