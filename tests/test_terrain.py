import random

import pytest

from river_raid.errors import DesignError
from river_raid.terrain import (
    DesignLine, Kind, generate_line, generate_part, generate_rows,
    load_design, parse_design, percent_to_cells, segment_widths,
)


class AlwaysRandom(random.Random):
    """Random source that always rolls an enemy."""

    def random(self):
        return 0.0


def test_parse_design_reads_six_numbers_per_line():
    designs = parse_design('40 20 40 0 0 3\n\n10.5 30 20 30 9.5 7\n')
    assert designs == [
        DesignLine((40.0, 20.0, 40.0, 0.0, 0.0), 3),
        DesignLine((10.5, 30.0, 20.0, 30.0, 9.5), 7),
    ]


def test_parse_design_accepts_any_whitespace():
    assert parse_design('40\t20  40 0 0 3.0') == [DesignLine((40.0, 20.0, 40.0, 0.0, 0.0), 3)]


@pytest.mark.parametrize('text', [
    '40 20 40 0 3',
    '40 20 40 0 0 3 1',
    '40 twenty 40 0 0 3',
    '40 -20 40 0 0 3',
    '40 20 40 0 0 nan',
    '',
    '\n  \n',
])
def test_parse_design_rejects_malformed_input(text):
    with pytest.raises(DesignError):
        parse_design(text)


def test_parse_design_names_the_bad_line():
    with pytest.raises(DesignError, match='line 2'):
        parse_design('40 20 40 0 0 3\n40 x 40 0 0 3\n')


def test_load_design_missing_file(tmp_path):
    with pytest.raises(DesignError):
        load_design(str(tmp_path / 'nope.design'))


def test_load_design_reads_file(tmp_path):
    path = tmp_path / 'scene.design'
    path.write_text('40 20 40 0 0 3\n', encoding='utf-8')
    assert load_design(str(path)) == [DesignLine((40.0, 20.0, 40.0, 0.0, 0.0), 3)]


def test_percent_to_cells_floors():
    assert percent_to_cells(33.3, 80) == 26
    assert percent_to_cells(40, 80) == 32
    assert percent_to_cells(0, 80) == 0


@pytest.mark.parametrize('percents', [
    (40, 20, 40, 0, 0),
    (33.3, 33.3, 33.3, 0, 0),
    (10, 35, 10, 35, 10),
    (12.5, 12.5, 12.5, 12.5, 12.5),
    (0, 100, 0, 0, 0),
])
@pytest.mark.parametrize('width', [7, 79, 80, 133])
def test_segments_always_fill_the_width(percents, width):
    sizes = segment_widths(DesignLine(percents, 1), width)
    assert sum(sizes) == width
    floored = [percent_to_cells(p, width) for p in percents]
    # Only the last land segment absorbs the shortfall
    assert sizes[:4] == floored[:4]
    assert sizes[4] == floored[4] + width - sum(floored)


def test_segments_wider_than_terminal_are_rejected():
    with pytest.raises(DesignError):
        segment_widths(DesignLine((60, 60, 0, 0, 0), 1), 80)


def test_generate_line_example_row():
    row, height = generate_line(DesignLine((40, 20, 40, 0, 0), 3), 80)
    assert height == 3
    assert row == [Kind.LAND] * 32 + [Kind.RIVER] * 16 + [Kind.LAND] * 32


def test_generate_rows_example_has_no_enemies():
    rows = generate_rows(parse_design('40 20 40 0 0 3'), 80, random.Random(1))
    assert len(rows) == 3
    expected = [Kind.LAND] * 32 + [Kind.RIVER] * 16 + [Kind.LAND] * 32
    assert all(row == expected for row in rows)


def test_generate_part_rows_are_independent_copies():
    line = [Kind.LAND, Kind.RIVER, Kind.LAND]
    part = generate_part(line, 3, with_enemies=False)
    part[0][1] = Kind.ENEMY
    assert part[1][1] is Kind.RIVER
    assert line[1] is Kind.RIVER


def test_generate_part_places_one_enemy_on_river():
    line, _ = generate_line(DesignLine((10, 35, 10, 35, 10), 1), 80)
    part = generate_part(line, 50, with_enemies=True, rng=AlwaysRandom(3))
    for row in part:
        enemies = [x for x, kind in enumerate(row) if kind is Kind.ENEMY]
        assert len(enemies) == 1
        assert line[enemies[0]] is Kind.RIVER


def test_generate_part_skips_rows_without_river():
    line = [Kind.LAND] * 10
    part = generate_part(line, 5, with_enemies=True, rng=AlwaysRandom())
    assert part == [[Kind.LAND] * 10] * 5


def test_first_part_never_has_enemies():
    designs = parse_design('10 80 10 0 0 30\n10 80 10 0 0 30\n')
    rows = generate_rows(designs, 80, AlwaysRandom(7))
    assert all(Kind.ENEMY not in row for row in rows[:30])
    assert all(row.count(Kind.ENEMY) == 1 for row in rows[30:])


def test_enemies_only_replace_river_cells():
    designs = parse_design('30 40 30 0 0 5\n15 30 10 30 15 200\n')
    rows = generate_rows(designs, 80, random.Random(42))
    template, _ = generate_line(designs[1], 80)
    enemy_rows = 0
    for row in rows[5:]:
        for x, kind in enumerate(row):
            if kind is Kind.ENEMY:
                assert template[x] is Kind.RIVER
                enemy_rows += 1
        assert row.count(Kind.ENEMY) <= 1
    # Roughly half of 200 rows
    assert 60 < enemy_rows < 140
