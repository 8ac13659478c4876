from mpilines.structs import Line


def demo_lines(width, height, padding=2):
    # coordenadas máximas válidas (limite estrito): width - 1, height - 1
    right, bottom = width - 1, height - 1
    return [
        # diagonal: canto superior esquerdo -> inferior direito
        Line.of(padding, padding, right - padding, bottom - padding),
        # diagonal: canto superior direito -> inferior esquerdo
        Line.of(right, 0, 0, bottom),
        # inclinação de 1/3 da altura, atravessando a imagem
        Line.of(0, height // 3, right, height * 2 // 3),
        # vertical no meio
        Line.of(width // 2, padding, width // 2, bottom - padding),
    ]


def lines_from_config(cfg):
    if cfg.lines:
        return [Line.of(*coords) for coords in cfg.lines]
    return demo_lines(cfg.width, cfg.height, cfg.padding)
