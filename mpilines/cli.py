"""Ponto de entrada: mpiexec -n 4 python -m mpilines [--config render.yaml] ..."""
import argparse
import logging
import sys

from mpi4py import MPI

from mpilines.config import LOG_LEVELS, load_config
from mpilines.errors import MpiLinesError
from mpilines.logging_config import setup_logging
from mpilines.runner import run

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="mpilines",
        description="Renderiza linhas com anti-aliasing distribuindo as scanlines entre processos MPI.")
    parser.add_argument("--config", help="arquivo YAML de configuração")
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument("--runs", type=int, help="rodadas cronometradas")
    parser.add_argument("--output", help="PNG de saída (primeira rodada)")
    parser.add_argument("--log-level", dest="log_level", choices=LOG_LEVELS)
    return parser.parse_args(argv)


def main(argv=None):
    comm = MPI.COMM_WORLD # comunicador com todos os processos lançados
    rank = comm.Get_rank()
    size = comm.Get_size()

    args = parse_args(argv)
    try:
        cfg = load_config(args.config, width=args.width, height=args.height, runs=args.runs,
                          output=args.output, log_level=args.log_level)
    except MpiLinesError as ex:
        # todos os ranks leem a mesma configuração, então todos falham juntos
        setup_logging("ERROR", rank)
        logger.error("configuração inválida: %s", ex)
        return 1

    setup_logging(cfg.log_level, rank)
    if rank == 0:
        logger.info("%d processos (%d workers), imagem %dx%d", size, size - 1, cfg.width, cfg.height)

    try:
        run(comm, cfg, clock=MPI.Wtime)
    except MpiLinesError as ex:
        logger.error("execução abortada: %s", ex)
        if size > 1:
            comm.Abort(1) # derruba todos os ranks; não há recuperação parcial
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
