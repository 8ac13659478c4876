import logging
from pathlib import Path

import cv2
import numpy as np

from mpilines.errors import ImageWriteError

logger = logging.getLogger(__name__)


def write_png(image, path):
    path = Path(path)
    # OpenCV trabalha em BGR(A)
    bgra = cv2.cvtColor(image.to_rgba(), cv2.COLOR_RGBA2BGRA)
    try:
        ok = cv2.imwrite(str(path), bgra)
    except cv2.error as ex:
        raise ImageWriteError(f"falha ao codificar {path}: {ex}") from ex
    if not ok:
        raise ImageWriteError(f"não foi possível gravar {path}")
    logger.info("imagem %dx%d gravada em %s", image.width, image.height, path)
    return path


def read_png(path):
    bgra = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if bgra is None:
        raise ImageWriteError(f"não foi possível ler {path}")
    return np.ascontiguousarray(cv2.cvtColor(bgra, cv2.COLOR_BGRA2RGBA))
