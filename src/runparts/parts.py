from __future__ import annotations

"""
Run-parts session.

``Parts`` traverses or reads the files of one or more directories laid out
the Debian run-parts way. Given

    ── etc
    │   ├── 10-both.conf
    │   ├── 10-only-etc.conf
    │   └── 20-only-etc.conf
    ├── test.conf
    └── usr
        └── lib
            ├── 10-both.conf
            ├── 10-executable.sh
            └── 10-only-lib.conf

and paths ``['etc', 'test.conf', 'usr/lib']`` with a ``\\.conf$`` pattern,
``readdirnames()`` yields

    etc/10-both.conf
    etc/10-only-etc.conf
    usr/lib/10-only-lib.conf
    etc/20-only-etc.conf
    test.conf

and ``read()`` streams the contents of those files in that order.
"""

import logging
import os
from typing import List, Optional, Sequence, Union

from runparts.core.interfaces.fs import FilesystemProtocol
from runparts.core.interfaces.parts import PartsProtocol
from runparts.core.models import Config, default_config
from runparts.discovery.path_resolver import PathResolver
from runparts.io.concat_reader import ConcatenatingReader, open_files
from runparts.io.filesystem import LocalFilesystem
from runparts.logging.helpers import get_logger

PathLike = Union[str, os.PathLike]


class Parts(PartsProtocol):
    """A run-parts view over *paths*.

    Names are resolved again on every ``readdirnames`` call. The read state
    (open handles plus the composed reader) is created by the first read and
    released by ``close``; reading after ``close`` starts a fresh pass.
    """

    def __init__(
        self,
        paths: Sequence[PathLike],
        config: Optional[Config] = None,
        *,
        filesystem: Optional[FilesystemProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.paths: List[str] = [os.fspath(p) for p in paths]
        self.config: Config = config if config is not None else default_config()
        self._fs: FilesystemProtocol = filesystem or LocalFilesystem()
        self._log = logger or get_logger('parts')
        self._resolver = PathResolver(filesystem=self._fs, logger=self._log)
        self._read_state: Optional[ConcatenatingReader] = None

    def __repr__(self) -> str:
        return f'Parts(paths={self.paths!r}, config={self.config!r})'

    # -------- Listing --------

    def readdirnames(self, n: int = 0) -> List[str]:
        """Return resolved file paths in run-parts order.

        At most *n* names are returned when ``n > 0``.

        Raises:
            PathAccessError: a path could not be stat'd or listed.
        """
        return self._resolver.resolve(self.paths, self.config, n)

    # -------- Reading --------

    @property
    def reading(self) -> bool:
        """True while a read state holds open handles."""
        return self._read_state is not None

    def _ensure_read_state(self) -> ConcatenatingReader:
        if self._read_state is None:
            names = self.readdirnames(0)
            self._read_state = open_files(names, self._fs, logger=self._log)
            self._log.debug('opened %d part(s) for reading', len(names))
        return self._read_state

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to *size* bytes of the concatenated contents.

        Returns ``b''`` once every file is exhausted.

        Raises:
            PathAccessError: resolution or opening failed on the first read.
            ReadError: an I/O error happened mid-stream.
        """
        return self._ensure_read_state().read(size)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        return self._ensure_read_state().readinto(buffer)

    def readall(self) -> bytes:
        return self._ensure_read_state().readall()

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        """Release every handle opened by read; a no-op when nothing is open.

        Raises:
            CloseError: a handle failed to close. The others were still
                released and the read state is gone.
        """
        state, self._read_state = self._read_state, None
        if state is None:
            return
        self._log.debug('closing %d part(s)', len(state.names))
        state.close()

    def __enter__(self) -> 'Parts':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
