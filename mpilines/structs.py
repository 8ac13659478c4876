from typing import NamedTuple

import numpy as np

UINT_MAX = int(np.iinfo(np.uint32).max) # maior valor de um inteiro sem sinal de 32 bits (0xFFFFFFFF)


class Pixel(NamedTuple):
    # canais de 8 bits; o padrão é branco opaco
    r: int = 255
    g: int = 255
    b: int = 255
    a: int = 255

    def with_alpha(self, a):
        return self._replace(a=int(a))


class Point(NamedTuple):
    x: int
    y: int


class Line(NamedTuple):
    start: Point
    end: Point

    @classmethod
    def of(cls, sx, sy, ex, ey):
        return cls(Point(int(sx), int(sy)), Point(int(ex), int(ey)))

    @property
    def dx(self):
        return self.end.x - self.start.x

    @property
    def dy(self):
        return self.end.y - self.start.y

    def is_sentinel(self):
        # a linha sentinela só é definida pelo ponto inicial; o final é ignorado
        return self.start.x == UINT_MAX and self.start.y == UINT_MAX


SENTINEL_LINE = Line(Point(UINT_MAX, UINT_MAX), Point(UINT_MAX, UINT_MAX))
