"""Ponto de entrada com o MPI real, em um único processo (sem mpiexec)."""
import pytest

pytest.importorskip("mpi4py")
try:
    from mpi4py import MPI  # noqa: F401
except Exception as ex:  # biblioteca MPI ausente no ambiente
    pytest.skip(f"MPI indisponível: {ex}", allow_module_level=True)

from mpilines.cli import main, parse_args


def test_parse_args():
    args = parse_args(["--width", "40", "--log-level", "DEBUG"])
    assert args.width == 40
    assert args.log_level == "DEBUG"
    assert args.config is None and args.runs is None


def test_single_process_run(tmp_path):
    out = tmp_path / "out.png"
    assert main(["--width", "40", "--height", "30", "--runs", "1", "--output", str(out)]) == 0
    assert out.exists()


def test_invalid_config_exits_nonzero(tmp_path):
    assert main(["--runs", "0", "--output", str(tmp_path / "out.png")]) == 1
