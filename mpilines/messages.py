"""Mensagens trocadas entre coordenador e workers.

Cada mensagem é um valor imutável, serializado em um buffer uint32 novo a
cada envio:

    linha (broadcast):   [start.x, start.y, end.x, end.y]
    pixel (tag PIXEL_TAG): [cobertura, x, y]

A linha sentinela tem start.x == start.y == UINT_MAX e encerra os workers;
a atualização terminal tem x == y == UINT_MAX e indica que o worker
terminou sua parte da linha atual.
"""
from typing import NamedTuple

import numpy as np

from mpilines.errors import ProtocolError
from mpilines.structs import SENTINEL_LINE, UINT_MAX, Line

WIRE_DTYPE = np.uint32
LINE_WORDS = 4
PIXEL_WORDS = 3
PIXEL_TAG = 1 # tag das mensagens de pixel (coordenador recebe de qualquer worker)


class LineMessage(NamedTuple):
    line: Line

    @classmethod
    def shutdown(cls):
        return cls(SENTINEL_LINE)

    @property
    def is_shutdown(self):
        return self.line.is_sentinel()

    def encode(self):
        s, e = self.line
        return np.array([s.x, s.y, e.x, e.y], dtype=WIRE_DTYPE)

    @classmethod
    def decode(cls, buf):
        words = _check(buf, LINE_WORDS, "linha")
        return cls(Line.of(*words))


class PixelUpdate(NamedTuple):
    x: int
    y: int
    coverage: int = 0

    @classmethod
    def finished(cls):
        return cls(UINT_MAX, UINT_MAX, 0)

    @property
    def is_finished(self):
        return self.x == UINT_MAX and self.y == UINT_MAX

    def encode(self):
        return np.array([self.coverage, self.x, self.y], dtype=WIRE_DTYPE)

    @classmethod
    def decode(cls, buf):
        coverage, x, y = _check(buf, PIXEL_WORDS, "pixel")
        update = cls(x, y, coverage)
        if not update.is_finished and coverage > 255:
            raise ProtocolError(f"cobertura inválida {coverage} em ({x}, {y})")
        return update


def empty_line_buffer():
    return np.zeros(LINE_WORDS, dtype=WIRE_DTYPE)


def empty_pixel_buffer():
    return np.zeros(PIXEL_WORDS, dtype=WIRE_DTYPE)


def _check(buf, words, kind):
    buf = np.asarray(buf)
    if buf.dtype != WIRE_DTYPE or buf.shape != (words,):
        raise ProtocolError(
            f"mensagem de {kind} malformada: dtype={buf.dtype} shape={buf.shape}")
    return [int(w) for w in buf]
