"""
Terrain Grammar
================
Turns design lines into rows of typed cells.

A design line holds five percentages and a part height:

    land  river  land  river  land  height
    40    20     40    0      0     3

Each percentage becomes ``floor(percent * width / 100)`` cells and whatever
the flooring leaves over is added to the last land segment, so every row is
exactly ``width`` cells wide. The row is then repeated ``height`` times to
form one terrain part. Every part but the first may carry enemies: each of
its rows has an even chance of getting a single enemy on a random river cell.
"""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

from .errors import DesignError


logger = logging.getLogger(__name__)

ENEMY_CHANCE = 0.5
FIELDS_PER_LINE = 6


class Kind(Enum):
    """What a single terrain cell holds."""
    LAND = auto()
    RIVER = auto()
    ENEMY = auto()


Row = List[Kind]

# Segment order across a row
SEGMENT_KINDS = (Kind.LAND, Kind.RIVER, Kind.LAND, Kind.RIVER, Kind.LAND)


@dataclass(frozen=True)
class DesignLine:
    """One line of the design file."""
    percents: Tuple[float, float, float, float, float]
    height: int


# =============================================================================
# PARSING
# =============================================================================

def parse_design(text: str) -> List[DesignLine]:
    """Parse design file contents. Blank lines are ignored."""
    designs = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) != FIELDS_PER_LINE:
            raise DesignError(
                f'line {line_number}: expected {FIELDS_PER_LINE} numbers, '
                f'got {len(fields)}'
            )

        try:
            values = [float(field) for field in fields]
        except ValueError as exc:
            raise DesignError(f'line {line_number}: {exc}') from exc

        if any(math.isnan(v) or math.isinf(v) for v in values):
            raise DesignError(f'line {line_number}: numbers must be finite')
        if any(v < 0 for v in values):
            raise DesignError(f'line {line_number}: negative value')

        designs.append(DesignLine(
            percents=tuple(values[:5]),
            height=int(values[5]),
        ))

    if not designs:
        raise DesignError('design is empty')
    return designs


def load_design(path: str) -> List[DesignLine]:
    """Read and parse a design file."""
    try:
        with open(path, encoding='utf-8') as handle:
            text = handle.read()
    except OSError as exc:
        raise DesignError(f'cannot read design file {path}: {exc}') from exc

    designs = parse_design(text)
    logger.info('Loaded %d design lines from %s', len(designs), path)
    return designs


# =============================================================================
# GENERATION
# =============================================================================

def percent_to_cells(percent: float, width: int) -> int:
    """Convert a percentage of the terminal width to a cell count."""
    return int(math.floor(percent * width / 100.0))


def segment_widths(design: DesignLine, width: int) -> List[int]:
    """
    Cell counts of the five segments.

    Rounding shortfall goes to the last land segment. Percentages adding
    up to more than the width break the row invariant and are rejected.
    """
    sizes = [percent_to_cells(p, width) for p in design.percents]
    total = sum(sizes)
    if total > width:
        raise DesignError(
            f'segments {design.percents} need {total} cells, '
            f'terminal is {width} wide'
        )
    sizes[-1] += width - total
    return sizes


def generate_line(design: DesignLine, width: int) -> Tuple[Row, int]:
    """Build one terrain row and return it with its part height."""
    row: Row = []
    for kind, size in zip(SEGMENT_KINDS, segment_widths(design, width)):
        row.extend([kind] * size)
    return row, design.height


def generate_part(line: Row, height: int, with_enemies: bool,
                  rng: Optional[random.Random] = None) -> List[Row]:
    """Repeat a row ``height`` times, optionally seeding enemies."""
    if not with_enemies:
        return [list(line) for _ in range(height)]

    if rng is None:
        rng = random.Random()

    river_columns = [i for i, kind in enumerate(line) if kind is Kind.RIVER]
    part = []
    for _ in range(height):
        row = list(line)
        # Rows without water cannot hold an enemy
        if river_columns and rng.random() < ENEMY_CHANCE:
            row[rng.choice(river_columns)] = Kind.ENEMY
        part.append(row)
    return part


def generate_rows(designs: Sequence[DesignLine], width: int,
                  rng: Optional[random.Random] = None) -> List[Row]:
    """Generate the full terrain. The first part is always enemy-free."""
    if rng is None:
        rng = random.Random()

    rows: List[Row] = []
    for index, design in enumerate(designs):
        line, height = generate_line(design, width)
        rows.extend(generate_part(line, height, with_enemies=index > 0, rng=rng))
    return rows
