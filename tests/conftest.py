"""Comunicador falso, em memória, com o subconjunto de mpi4py.MPI.Comm usado pelo protocolo.

Cada rank roda em uma thread. O Recv do rank 0 escolhe aleatoriamente
(com semente fixa) entre as mensagens já pendentes, para exercitar
intercalações arbitrárias entre workers.
"""
import queue
import random
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from mpilines.image import Image
from mpilines.protocol import coordinate, serve
from mpilines.structs import Pixel

TIMEOUT = 20


class FakeWorld:
    def __init__(self, size, seed=0):
        self.size = size
        self.bcasts = [queue.Queue() for _ in range(size)]
        self.inboxes = [queue.Queue() for _ in range(size)]
        self.rng = random.Random(seed)
        self.sent = [[] for _ in range(size)] # histórico de envios por rank de origem
        self.pending = [[] for _ in range(size)] # já retiradas da fila, ainda não entregues

    def comm(self, rank):
        return FakeComm(self, rank)


class FakeComm:
    def __init__(self, world, rank):
        self.world = world
        self.rank = rank
        self.pending = world.pending[rank]

    def Get_rank(self):
        return self.rank

    def Get_size(self):
        return self.world.size

    def Bcast(self, buf, root=0):
        if self.rank == root:
            for r in range(self.world.size):
                if r != root:
                    self.world.bcasts[r].put(np.array(buf, copy=True))
        else:
            data = self.world.bcasts[self.rank].get(timeout=TIMEOUT)
            assert data.shape == buf.shape and data.dtype == buf.dtype
            buf[:] = data

    def Send(self, buf, dest, tag=0):
        msg = (self.rank, tag, np.array(buf, copy=True))
        self.world.sent[self.rank].append(msg)
        self.world.inboxes[dest].put(msg)

    def Recv(self, buf, source=None, tag=None, status=None):
        inbox = self.world.inboxes[self.rank]
        if not self.pending:
            self.pending.append(inbox.get(timeout=TIMEOUT))
        while True:
            try:
                self.pending.append(inbox.get_nowait())
            except queue.Empty:
                break
        # ordem arbitrária entre origens, mas preservada para a mesma origem (como no MPI)
        sources = sorted({m[0] for m in self.pending})
        chosen = self.world.rng.choice(sources)
        index = next(i for i, m in enumerate(self.pending) if m[0] == chosen)
        msg = self.pending.pop(index)
        src, msg_tag, data = msg
        assert tag is None or msg_tag == tag
        assert source is None or src == source
        buf[:] = data


def run_distributed(size, lines, width, height, color=Pixel(0, 0, 0), background=Pixel(100, 100, 100), seed=0):
    world = FakeWorld(size, seed)
    image = Image(width, height)
    image.fill(background)
    with ThreadPoolExecutor(max_workers=max(size - 1, 1)) as pool:
        workers = [pool.submit(serve, world.comm(r)) for r in range(1, size)]
        applied = coordinate(world.comm(0), image, lines, color)
        served = [w.result(timeout=TIMEOUT) for w in workers]
    return image, applied, served, world


@pytest.fixture
def distributed():
    return run_distributed
