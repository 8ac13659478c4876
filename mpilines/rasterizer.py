"""Rasterização de linhas em um único processo.

Para cada linha escolhe o eixo principal (o de maior delta), percorre as
scanlines desse eixo do menor para o maior extremo, inclusive, e gera os
dois pixels (teto e piso) que cercam a posição ideal no eixo secundário.
"""
import logging
import math

import numpy as np

from mpilines.blend import blend_alpha
from mpilines.coverage import coverage

logger = logging.getLogger(__name__)


def major_axis(line):
    return "y" if abs(line.dx) < abs(line.dy) else "x"


def _ordered(line, axis):
    # menor coordenada no eixo principal vira o início
    start, end = line.start, line.end
    if getattr(start, axis) > getattr(end, axis):
        start, end = end, start
    return start, end


def scanline_span(line):
    """Primeira e última scanline (inclusivas) no eixo principal."""
    axis = major_axis(line)
    start, end = _ordered(line, axis)
    return getattr(start, axis), getattr(end, axis)


def rasterize(line, lo=None, hi=None, include_zero=False):
    """Gera (x, y, cobertura) para os pixels cobertos nas scanlines [lo, hi).

    Sem lo/hi percorre a linha inteira. Com include_zero também gera os
    candidatos de cobertura 0. A cobertura é sempre calculada com
    a linha original, não com os extremos reordenados.
    """
    axis = major_axis(line)
    start, end = _ordered(line, axis)
    first, last = getattr(start, axis), getattr(end, axis)
    lo = first if lo is None else max(lo, first)
    hi = last + 1 if hi is None else min(hi, last + 1)

    minor = "x" if axis == "y" else "y"
    major_delta = last - first
    minor_delta = getattr(end, minor) - getattr(start, minor)
    # linha de um único ponto: não há inclinação para interpolar
    slope = np.float32(minor_delta) / np.float32(major_delta) if major_delta else np.float32(0)
    origin = np.float32(getattr(start, minor))

    for step in range(lo, hi):
        ideal = origin + slope * np.float32(step - first)
        candidates = {math.ceil(ideal), math.floor(ideal)}
        for other in sorted(candidates):
            x, y = (other, step) if axis == "y" else (step, other)
            c = coverage(line, x, y)
            if c > 0 or include_zero:
                yield x, y, c


def _candidate_color(color, c):
    # cobertura 0 mantém o alfa da própria cor; o candidato é composto mesmo assim
    return color.with_alpha(c) if c > 0 else color


def render_line(image, line, color):
    count = 0
    for x, y, c in rasterize(line, include_zero=True):
        image.blend(x, y, _candidate_color(color, c))
        count += 1
    return count


def render_lines(image, lines, color):
    # acumula o alfa de todas as linhas por pixel e desenha cada pixel uma única vez
    alphas = {}
    for line in lines:
        for x, y, c in rasterize(line, include_zero=True):
            alpha = _candidate_color(color, c).a
            alphas[(x, y)] = blend_alpha(alphas.get((x, y), 0), alpha)

    for (x, y), alpha in alphas.items():
        image.blend(x, y, color.with_alpha(alpha))
    logger.debug("%d linhas desenhadas, %d pixels tocados", len(lines), len(alphas))
    return len(alphas)
