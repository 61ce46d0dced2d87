from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional

from runparts.core.errors import PathAccessError
from runparts.core.interfaces.fs import FilesystemProtocol
from runparts.core.mode import FileMode, lstat_mode, stat_mode
from runparts.logging.helpers import get_logger, trace_io


class LocalFilesystem(FilesystemProtocol):
    """FilesystemProtocol backed by the local OS.

    Every failure surfaces as PathAccessError with the original OSError
    chained.
    """

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('io.fs')

    def stat_mode(self, path: str) -> FileMode:
        return stat_mode(path)

    def lstat_mode(self, path: str) -> FileMode:
        return lstat_mode(path)

    def listdir(self, path: str) -> list[str]:
        try:
            names = os.listdir(path)
        except OSError as exc:
            raise PathAccessError(path, exc.strerror or exc) from exc
        trace_io(self._log, 'listdir', path=path, entries=len(names))
        return names

    def open(self, path: str) -> BinaryIO:
        try:
            fh = open(path, 'rb')
        except OSError as exc:
            raise PathAccessError(path, exc.strerror or exc) from exc
        trace_io(self._log, 'open', path=path)
        return fh
