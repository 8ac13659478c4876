"""Protocolo coordenador/workers sobre um comunicador MPI.

O rank 0 coordena: para cada linha faz Bcast para todos, recebe com Recv
as atualizações de pixel de qualquer worker (em qualquer ordem) e só passa
para a próxima linha depois de receber o "terminei" de todos os N-1
workers. Os workers (ranks 1..N-1) rasterizam apenas a fatia de scanlines
que corresponde ao seu rank. Ao final o coordenador transmite a linha
sentinela e todos saem do laço.

`comm` é qualquer objeto com a interface de `mpi4py.MPI.Comm`
(Get_rank, Get_size, Bcast, Send, Recv).
"""
import logging

from mpilines.errors import ImageBoundsError, ProtocolError
from mpilines.messages import (PIXEL_TAG, LineMessage, PixelUpdate,
                               empty_line_buffer, empty_pixel_buffer)
from mpilines.rasterizer import major_axis, rasterize, scanline_span

logger = logging.getLogger(__name__)

ROOT = 0


def partition(first, last, worker_index, worker_count):
    """Fatia [lo, hi) das scanlines first..last (inclusivas) de um worker.

    As fatias são contíguas, disjuntas e juntas cobrem a linha toda; a
    última fatia não vazia pode ser menor que as demais.
    """
    if worker_count < 1:
        raise ValueError(f"worker_count precisa ser >= 1, recebido {worker_count}")
    if not 0 <= worker_index < worker_count:
        raise ValueError(f"worker_index {worker_index} fora de 0..{worker_count - 1}")
    span = last - first + 1
    chunk = max(-(-span // worker_count), 1) # divisão com teto
    lo = first + chunk * worker_index
    hi = min(first + chunk * (worker_index + 1), last + 1)
    return lo, max(lo, hi)


def work_share(line, worker_index, worker_count):
    first, last = scanline_span(line)
    lo, hi = partition(first, last, worker_index, worker_count)
    return rasterize(line, lo, hi)


def validate_line(line, image):
    if line.is_sentinel():
        raise ImageBoundsError(f"linha {line} coincide com a sentinela")
    for point in line:
        if not image.in_bounds(point.x, point.y):
            raise ImageBoundsError(
                f"ponto ({point.x}, {point.y}) fora da imagem {image.width}x{image.height}")


def broadcast_line(comm, line):
    comm.Bcast(LineMessage(line).encode(), root=ROOT)


def broadcast_shutdown(comm):
    logger.info("enviando linha sentinela para %d workers", comm.Get_size() - 1)
    comm.Bcast(LineMessage.shutdown().encode(), root=ROOT)


def coordinate_line(comm, image, line, color):
    """Distribui uma linha e compõe na imagem o que os workers devolverem."""
    validate_line(line, image)
    workers = comm.Get_size() - 1

    logger.debug("broadcast da linha (%d,%d) -> (%d,%d)", *line.start, *line.end)
    broadcast_line(comm, line)

    finished = 0
    applied = 0
    while finished < workers:
        buf = empty_pixel_buffer() # buffer novo a cada recepção
        comm.Recv(buf, tag=PIXEL_TAG) # source padrão: qualquer worker
        update = PixelUpdate.decode(buf)
        if update.is_finished:
            finished += 1
            logger.debug("worker terminou (%d/%d)", finished, workers)
            continue
        if not image.in_bounds(update.x, update.y):
            raise ProtocolError(
                f"pixel ({update.x}, {update.y}) fora da imagem {image.width}x{image.height}")
        image.blend(update.x, update.y, color.with_alpha(update.coverage))
        applied += 1
    return applied


def coordinate(comm, image, lines, color, shutdown=True):
    """Desenha todas as linhas, na ordem dada; devolve o total de pixels compostos."""
    if comm.Get_size() < 2:
        # sem workers: desenha no próprio processo, linha a linha como no modo distribuído
        logger.info("apenas 1 processo, renderizando %d linhas localmente", len(lines))
        total = 0
        for line in lines:
            validate_line(line, image)
            # só candidatos cobertos, como os workers enviam
            for x, y, c in rasterize(line):
                image.blend(x, y, color.with_alpha(c))
                total += 1
        return total

    total = 0
    for i, line in enumerate(lines):
        total += coordinate_line(comm, image, line, color)
        logger.info("linha %d/%d concluída", i + 1, len(lines))
    if shutdown:
        broadcast_shutdown(comm)
    return total


def serve(comm):
    """Laço do worker; devolve quantas linhas foram processadas até a sentinela."""
    rank = comm.Get_rank()
    worker_index = rank - 1
    worker_count = comm.Get_size() - 1
    if worker_index < 0:
        raise ProtocolError("o rank 0 é o coordenador e não pode servir como worker")

    served = 0
    while True:
        buf = empty_line_buffer()
        comm.Bcast(buf, root=ROOT) # participa do broadcast e recebe a próxima linha
        message = LineMessage.decode(buf)
        if message.is_shutdown:
            logger.debug("worker %d recebeu a sentinela após %d linhas", rank, served)
            return served

        line = message.line
        sent = 0
        for x, y, c in work_share(line, worker_index, worker_count):
            comm.Send(PixelUpdate(x, y, c).encode(), dest=ROOT, tag=PIXEL_TAG)
            sent += 1
        comm.Send(PixelUpdate.finished().encode(), dest=ROOT, tag=PIXEL_TAG)
        logger.debug("worker %d: eixo %s, %d pixels enviados", rank, major_axis(line), sent)
        served += 1
