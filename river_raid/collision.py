"""
Collision Pass
===============
Projectile hits and player crashes against the visible window.

``window`` is always the list of logical scene indices in screen order:
``window[y]`` is the scene row drawn on terminal row ``y``.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Sequence

from .entities import Projectile
from .scene import Scene
from .terrain import Kind


logger = logging.getLogger(__name__)

DEADLY_KINDS = (Kind.LAND, Kind.ENEMY)


@dataclass
class SweepResult:
    """Outcome of one collision sweep."""
    survivors: List[Projectile] = field(default_factory=list)
    removed: List[Projectile] = field(default_factory=list)
    # Copies of every projectile as it stood during the sweep, for drawing
    drawn: List[Projectile] = field(default_factory=list)
    destroyed: int = 0


def sweep_projectiles(projectiles: Sequence[Projectile], scene: Scene,
                      window: Sequence[int]) -> SweepResult:
    """
    Resolve projectile collisions for one render pass.

    A projectile hits the first enemy in its column between the row where
    the previous sweep saw it and its current row, both included. The
    enemy becomes river through ``Scene.destroy_enemy``, which refuses to
    destroy the same enemy twice. Projectiles that reached row 0 are
    removed whether or not they hit anything.
    """
    result = SweepResult()

    for projectile in projectiles:
        result.drawn.append(replace(projectile))

        if _hit_enemy(projectile, scene, window):
            result.destroyed += 1
            result.removed.append(projectile)
            logger.debug('Projectile %d destroyed enemy at (%d, %d)',
                         projectile.id, projectile.x, projectile.y)
        elif projectile.y <= 0:
            result.removed.append(projectile)
        else:
            projectile.swept_y = projectile.y
            result.survivors.append(projectile)

    return result


def _hit_enemy(projectile: Projectile, scene: Scene, window: Sequence[int]) -> bool:
    if not 0 <= projectile.x < scene.width:
        return False

    lowest = min(projectile.swept_y, len(window) - 1)
    # Walk upward along the path travelled since the last sweep
    for y in range(lowest, projectile.y - 1, -1):
        if y < 0:
            break
        if scene.destroy_enemy(window[y], projectile.x):
            return True
    return False


def player_crashed(scene: Scene, window: Sequence[int], x: int, y: int) -> bool:
    """True if the player sits on land or an enemy."""
    return scene.kind_at(window[y], x) in DEADLY_KINDS
