"""Cobertura de uma linha sobre um pixel.

Os casos usam inclinações exatas em ponto flutuante (0, 1, 1/4), então os
valores esperados são exatos; os demais comparam com tolerância de 1 unidade.
"""
import pytest

from mpilines.coverage import accumulated_coverage, coverage
from mpilines.structs import Line

QUARTER = Line.of(0, 0, 4, 1)


def test_diagonal_full_coverage():
    line = Line.of(0, 0, 10, 10)
    assert [coverage(line, i, i) for i in range(11)] == [255] * 11
    assert coverage(line, 3, 4) == 0


def test_outside_span_is_zero():
    line = Line.of(5, 5, 15, 10)
    # (4, 5) está a meia unidade do prolongamento da linha, mas antes do início
    assert coverage(line, 4, 5) == 0
    assert coverage(line, 16, 10) == 0
    assert coverage(line, 15, 10) == 255


def test_horizontal_line():
    line = Line.of(0, 5, 10, 5)
    assert all(coverage(line, x, 5) == 255 for x in range(11))
    assert coverage(line, 5, 6) == 0


def test_vertical_line_division_by_zero():
    line = Line.of(3, 0, 3, 10)
    assert all(coverage(line, 3, y) == 255 for y in range(11))
    assert coverage(line, 4, 5) == 0


def test_single_point_line():
    assert coverage(Line.of(3, 3, 3, 3), 3, 3) == 255


@pytest.mark.parametrize("x,y,expected", [
    (1, 0, 191), (1, 1, 64),
    (2, 0, 128), (2, 1, 128),
    (3, 0, 64), (3, 1, 191),
    (0, 1, 0), (2, 2, 0),
])
def test_partial_coverage(x, y, expected):
    assert coverage(QUARTER, x, y) == expected


def test_matches_real_number_formula():
    line = Line.of(2, 1, 29, 11)
    for x in range(2, 30):
        ideal = 1 + 10 / 27 * (x - 2)
        for y in range(0, 13):
            deviation = abs(ideal - y)
            expected = 0 if deviation >= 1 else round(255 * (1 - deviation))
            assert abs(coverage(line, x, y) - expected) <= 1


def test_reversed_line_covers_same_pixels():
    reversed_line = Line.of(4, 1, 0, 0)
    assert coverage(reversed_line, 1, 0) == coverage(QUARTER, 1, 0)
    assert coverage(reversed_line, 3, 1) == coverage(QUARTER, 3, 1)
    assert coverage(reversed_line, 5, 1) == 0
    assert coverage(reversed_line, -1, 0) == 0


def test_accumulated_coverage():
    assert accumulated_coverage([QUARTER], 1, 0) == 191
    # 191 + 191 * (255 - 191) // 255
    assert accumulated_coverage([QUARTER, QUARTER], 1, 0) == 238
    assert accumulated_coverage([QUARTER, Line.of(0, 5, 10, 5)], 1, 0) == 191
    assert accumulated_coverage([], 1, 0) == 0
