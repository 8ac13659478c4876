class MpiLinesError(Exception):
    """Base de todos os erros fatais de uma execução."""


class ImageBoundsError(MpiLinesError, IndexError):
    """Coordenada de pixel fora da imagem."""


class ImageAllocationError(MpiLinesError, MemoryError):
    pass


class ProtocolError(MpiLinesError):
    """Mensagem com formato ou conteúdo inesperado entre coordenador e workers."""


class ImageWriteError(MpiLinesError):
    pass


class ConfigError(MpiLinesError, ValueError):
    pass
