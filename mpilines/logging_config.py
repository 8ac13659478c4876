"""Configuração de logging compartilhada por todos os ranks.

Cada linha leva o rank MPI do processo, para que a saída intercalada de
`mpiexec` possa ser separada:

    2026-10-19 13:45:12,345 | INFO     | rank=0 | mpilines.protocol | linha 1/4 concluída
"""
import logging
import sys

FORMAT = "%(asctime)s | %(levelname)-8s | rank=%(rank)s | %(name)s | %(message)s"

_configured = False


class RankFilter(logging.Filter):
    def __init__(self, rank):
        super().__init__()
        self.rank = rank

    def filter(self, record):
        record.rank = self.rank
        return True


def setup_logging(level="INFO", rank=None):
    """Configura o logger raiz uma única vez; chamadas seguintes só ajustam o nível."""
    global _configured
    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        return root

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(FORMAT))
    handler.addFilter(RankFilter("-" if rank is None else rank))
    root.addHandler(handler)
    logging.captureWarnings(True)
    _configured = True
    return root
