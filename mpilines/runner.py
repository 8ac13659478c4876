"""Execução completa: aloca as imagens, mede o tempo das rodadas e grava a primeira."""
import logging
import time

from mpilines.encoder import write_png
from mpilines.image import Image
from mpilines.protocol import broadcast_shutdown, coordinate, serve
from mpilines.worklist import lines_from_config

logger = logging.getLogger(__name__)


def run(comm, cfg, clock=time.perf_counter, write=True):
    """Papel de cada rank: o 0 coordena e devolve a primeira imagem; os demais servem."""
    rank = comm.Get_rank()
    if rank != 0:
        served = serve(comm)
        logger.info("worker %d encerrado após %d linhas", rank, served)
        return None

    lines = lines_from_config(cfg)

    # uma imagem por rodada, todas preenchidas com o fundo antes de medir
    images = [Image.create(cfg.width, cfg.height) for _ in range(cfg.runs)]
    for image in images:
        image.fill(cfg.background)

    try:
        t0 = clock()
        for i, image in enumerate(images):
            total = coordinate(comm, image, lines, cfg.color, shutdown=False)
            logger.info("rodada %d/%d: %d pixels compostos", i + 1, cfg.runs, total)
        t1 = clock()
    finally:
        # libera os workers mesmo se a coordenação falhar antes da última linha
        if comm.Get_size() > 1:
            broadcast_shutdown(comm)

    print(f"Tempo médio ({cfg.runs} rodadas, {comm.Get_size()} processos): "
          f"{(t1 - t0) * 1000 / cfg.runs:6.2f} ms")

    if write:
        write_png(images[0], cfg.output)
    return images[0]
