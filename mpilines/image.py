import logging

import numpy as np

from mpilines.blend import blend_pixel
from mpilines.errors import ImageAllocationError, ImageBoundsError
from mpilines.structs import Pixel

logger = logging.getLogger(__name__)


class Image:
    """Grade RGBA de largura x altura, armazenada linha a linha (row-major)."""

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"dimensões inválidas: {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        try:
            # shape (altura, largura, 4) -> mesma ordem de memória de pixels[y * width + x]
            self.pixels = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        except MemoryError as ex:
            raise ImageAllocationError(
                f"não foi possível alocar imagem {self.width}x{self.height}") from ex
        logger.debug("imagem %dx%d alocada", self.width, self.height)

    @classmethod
    def create(cls, width, height):
        return cls(width, height)

    def fill(self, color):
        self.pixels[:, :] = tuple(color)

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x, y):
        # limite estrito (>=); x == width ou y == height também é erro
        if x < 0 or x >= self.width:
            raise ImageBoundsError(f"x={x} está fora da imagem (largura {self.width})")
        if y < 0 or y >= self.height:
            raise ImageBoundsError(f"y={y} está fora da imagem (altura {self.height})")
        return self.pixels[y, x] # view: escrever nela altera a imagem

    def pixel(self, x, y):
        return Pixel(*(int(c) for c in self.get(x, y)))

    def blend(self, x, y, color):
        cell = self.get(x, y)
        old = Pixel(*(int(c) for c in cell))
        cell[:] = blend_pixel(old, color)

    def to_rgba(self):
        return self.pixels

    def __eq__(self, other):
        if not isinstance(other, Image):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    def __repr__(self):
        return f"Image({self.width}, {self.height})"
