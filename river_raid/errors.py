"""
Errors
=======
Exception hierarchy. Everything here is fatal: the game has no degraded mode.
"""


class RiverRaidError(Exception):
    """Base class for all game errors."""


class DesignError(RiverRaidError):
    """The scene design file is missing or malformed."""


class SceneError(RiverRaidError):
    """The scene buffer was built or queried inconsistently."""


class TerminalError(RiverRaidError):
    """The terminal could not be queried or is unusable."""
