"""
Entity Model
=============
Player and projectile data, plus the projectile motion step.

Entities are plain dataclasses. Behaviour lives in the functions below
and in the shared-state service that owns the live instances.
"""

import itertools
from dataclasses import dataclass
from typing import Iterable


_projectile_ids = itertools.count(1)


@dataclass
class Player:
    """Player craft position in terminal coordinates."""
    x: int = 0
    y: int = 0


@dataclass
class Projectile:
    """
    A shot travelling straight up its column.

    ``swept_y`` is where the last collision sweep saw the projectile; the
    next sweep checks every row between it and the current ``y``.
    """
    id: int
    x: int
    y: int
    swept_y: int


def spawn_projectile(x: int, y: int) -> Projectile:
    """Create a projectile with a fresh id."""
    return Projectile(id=next(_projectile_ids), x=x, y=y, swept_y=y)


def motion_step(projectiles: Iterable[Projectile]) -> None:
    """Move every projectile up one row. Row 0 is the ceiling."""
    for projectile in projectiles:
        if projectile.y > 0:
            projectile.y -= 1
