"""
Scene Buffer
=============
The whole generated river, read through a scrolling window.

The scene is a ring: logical row ``i`` is ``rows[i % len(rows)]`` so the
river repeats forever as the frame counter grows.
"""

import logging
import random
from typing import List, Optional, Sequence

from .errors import SceneError
from .terrain import DesignLine, Kind, Row, generate_rows


logger = logging.getLogger(__name__)


class Scene:
    """Owns every terrain row and answers window queries."""

    def __init__(self, rows: List[Row]):
        if not rows:
            raise SceneError('scene has no rows')
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise SceneError('scene rows differ in width')
        self._rows = rows
        self._width = width

    @classmethod
    def from_design(cls, designs: Sequence[DesignLine], width: int,
                    rng: Optional[random.Random] = None) -> 'Scene':
        """Generate a scene from parsed design lines."""
        scene = cls(generate_rows(designs, width, rng))
        logger.info('Generated scene: %d rows x %d columns, %d enemies',
                    len(scene), scene.width, scene.enemy_count())
        return scene

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def width(self) -> int:
        return self._width

    def row(self, index: int) -> Row:
        """Logical row lookup with wrap-around."""
        return self._rows[index % len(self._rows)]

    def window_indices(self, start: int, height: int) -> List[int]:
        """
        Logical indices of a window of ``height + 1`` rows.

        Ordered low to high starting at ``start mod len``; the window wraps
        back to row 0 without skipping or repeating a row.
        """
        length = len(self._rows)
        if height < 0:
            raise SceneError(f'negative window height {height}')
        if height + 1 > length:
            raise SceneError(
                f'window of {height + 1} rows does not fit a scene of {length}'
            )
        first = start % length
        return [(first + offset) % length for offset in range(height + 1)]

    def get_window(self, start: int, height: int) -> List[Row]:
        """Rows of the window. These are the live rows, not copies."""
        return [self._rows[i] for i in self.window_indices(start, height)]

    def kind_at(self, index: int, x: int) -> Kind:
        return self.row(index)[x]

    def destroy_enemy(self, index: int, x: int) -> bool:
        """Turn an enemy back into river. Returns False if there was none."""
        row = self.row(index)
        if row[x] is not Kind.ENEMY:
            return False
        row[x] = Kind.RIVER
        return True

    def enemy_count(self) -> int:
        return sum(row.count(Kind.ENEMY) for row in self._rows)
