"""Configuração de uma execução, lida de YAML e validada em um dataclass imutável.

Uso::

    cfg = load_config()                          # valores padrão
    cfg = load_config("render.yaml", runs=1)     # arquivo + sobrescritas da CLI
"""
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Tuple

import yaml

from mpilines.errors import ConfigError
from mpilines.structs import Pixel

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RenderConfig:
    width: int = 1920 * 2
    height: int = 1080 * 2
    padding: int = 2
    background: Pixel = Pixel(100, 100, 100)
    color: Pixel = Pixel(0, 0, 0)
    runs: int = 4
    output: str = "renderedImage.png"
    log_level: str = "INFO"
    lines: Optional[Tuple[Tuple[int, int, int, int], ...]] = None # None -> linhas de demonstração


def _pixel(value, name):
    if isinstance(value, Pixel):
        return value
    try:
        channels = [int(c) for c in value]
    except (TypeError, ValueError) as ex:
        raise ConfigError(f"{name}: cor inválida {value!r}") from ex
    if len(channels) not in (3, 4) or not all(0 <= c <= 255 for c in channels):
        raise ConfigError(f"{name}: esperado [r, g, b] ou [r, g, b, a] em 0..255, recebido {value!r}")
    return Pixel(*channels)


def _lines(value):
    if value is None:
        return None
    lines = []
    for item in value:
        try:
            coords = tuple(int(c) for c in item)
        except (TypeError, ValueError) as ex:
            raise ConfigError(f"lines: entrada inválida {item!r}") from ex
        if len(coords) != 4 or any(c < 0 for c in coords):
            raise ConfigError(f"lines: esperado [sx, sy, ex, ey] não negativos, recebido {item!r}")
        lines.append(coords)
    return tuple(lines)


def validate(cfg):
    if cfg.width <= 0 or cfg.height <= 0:
        raise ConfigError(f"dimensões inválidas: {cfg.width}x{cfg.height}")
    if cfg.runs < 1:
        raise ConfigError(f"runs precisa ser >= 1, recebido {cfg.runs}")
    if not 0 <= cfg.padding < min(cfg.width, cfg.height) // 2:
        raise ConfigError(f"padding {cfg.padding} incompatível com {cfg.width}x{cfg.height}")
    if cfg.log_level not in LOG_LEVELS:
        raise ConfigError(f"log_level deve ser um de {LOG_LEVELS}, recebido {cfg.log_level!r}")
    for sx, sy, ex, ey in cfg.lines or ():
        if max(sx, ex) >= cfg.width or max(sy, ey) >= cfg.height:
            raise ConfigError(f"linha {(sx, sy, ex, ey)} fora da imagem {cfg.width}x{cfg.height}")
    return cfg


def load_config(path=None, **overrides):
    raw = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"arquivo de configuração não encontrado: {path}")
        with open(path, "r") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as ex:
                raise ConfigError(f"YAML inválido em {path}: {ex}") from ex
        if not isinstance(raw, dict):
            raise ConfigError(f"{path}: esperado um mapeamento no topo do arquivo")
        logger.debug("configuração carregada de %s", path)

    # sobrescritas com None (argumentos não informados na CLI) são ignoradas
    raw.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(RenderConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"chaves desconhecidas: {', '.join(unknown)}")

    try:
        values = dict(raw)
        for key in ("width", "height", "padding", "runs"):
            if key in values:
                values[key] = int(values[key])
        for key in ("background", "color"):
            if key in values:
                values[key] = _pixel(values[key], key)
        if "output" in values:
            values["output"] = str(values["output"])
        if "log_level" in values:
            values["log_level"] = str(values["log_level"]).upper()
        values["lines"] = _lines(values.get("lines"))
    except ConfigError:
        raise
    except (TypeError, ValueError) as ex:
        raise ConfigError(f"valor inválido na configuração: {ex}") from ex

    return validate(RenderConfig(**values))
