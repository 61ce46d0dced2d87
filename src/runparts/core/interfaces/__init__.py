from .fs import FilesystemProtocol, PathResolverProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .parts import ByteReaderProtocol, PartsProtocol

__all__ = [
    'FilesystemProtocol',
    'PathResolverProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'ByteReaderProtocol',
    'PartsProtocol',
]
