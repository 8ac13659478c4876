"""Cobertura (opacidade 0-255) de uma linha sobre um pixel.

A distância é medida no eixo y a partir do ponto inicial *original* da
linha, mesmo quando o rasterizador inverte os extremos para percorrê-la.
Quem chama deve sempre passar a linha sem reordenação.
"""
import math

import numpy as np

from mpilines.blend import blend_alpha


def _within_extent(px, dx):
    # px precisa cair entre o início e o fim da linha (inclusivo), no sentido de dx;
    # para dx < 0 a faixa é espelhada, então "px < 0 -> 0" só vale quando dx >= 0
    if dx >= 0:
        return 0 <= px <= dx
    return dx <= px <= 0


def _round_half_away(value):
    # round() do C: metade arredonda para longe de zero (Python usaria o "bankers rounding")
    return int(math.floor(float(value) + 0.5))


def coverage(line, x, y):
    dx = line.end.x - line.start.x
    dy = line.end.y - line.start.y
    px = x - line.start.x
    py = y - line.start.y

    # precisão simples, como o cálculo de referência; dx == 0 gera inf ou nan, nunca exceção
    with np.errstate(divide="ignore", invalid="ignore"):
        ideal = np.float32(dy) / np.float32(dx) * np.float32(px)
        deviation = abs(ideal - np.float32(py))

    if np.isnan(deviation):
        deviation = np.float32(0)

    if deviation >= 1 or not _within_extent(px, dx):
        return 0
    return _round_half_away(np.float32(255) * (np.float32(1) - deviation))


def accumulated_coverage(lines, x, y):
    alpha = 0
    for line in lines:
        alpha = blend_alpha(alpha, coverage(line, x, y))
    return alpha
