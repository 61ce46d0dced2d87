from __future__ import annotations

"""Sequential reader over the concatenated contents of several files.

The reader never emits anything between files, so callers cannot tell where
one file ends and the next begins. ``b''`` marks the end of the stream; I/O
failures raise ReadError instead.
"""

import logging
from contextlib import ExitStack
from typing import BinaryIO, List, Optional, Sequence

from runparts.core.errors import CloseError, ReadError
from runparts.core.interfaces.fs import FilesystemProtocol
from runparts.core.interfaces.parts import ByteReaderProtocol
from runparts.logging.helpers import get_logger, trace_io


class ConcatenatingReader(ByteReaderProtocol):
    """Read *handles* one after the other as a single byte stream.

    The reader owns the handles: ``close()`` releases all of them.
    """

    def __init__(
        self,
        handles: Sequence[BinaryIO],
        *,
        names: Optional[Sequence[str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._handles: List[BinaryIO] = list(handles)
        self._names: List[str] = list(names) if names is not None else [
            str(getattr(h, 'name', '?')) for h in self._handles
        ]
        self._index = 0
        self._log = logger or get_logger('io.concat')

    @property
    def names(self) -> List[str]:
        return list(self._names)

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._handles)

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to *size* bytes; a negative or None size reads everything.

        A single call never spans two files, so a short read does not mean
        the stream has ended. Only ``b''`` does.
        """
        if size is None or size < 0:
            return self.readall()
        if size == 0:
            return b''
        while self._index < len(self._handles):
            chunk = self._read_current(size)
            if chunk:
                return chunk
            trace_io(self._log, 'file exhausted', path=self._names[self._index])
            self._index += 1
        return b''

    def readinto(self, buffer: bytearray | memoryview) -> int:
        view = memoryview(buffer).cast('B')
        data = self.read(len(view))
        n = len(data)
        view[:n] = data
        return n

    def readall(self) -> bytes:
        parts: List[bytes] = []
        while self._index < len(self._handles):
            chunk = self._read_current(-1)
            if chunk:
                parts.append(chunk)
            self._index += 1
        return b''.join(parts)

    def readable(self) -> bool:
        return True

    def _read_current(self, size: int) -> bytes:
        try:
            return self._handles[self._index].read(size)
        except OSError as exc:
            raise ReadError(self._names[self._index], exc) from exc

    def close(self) -> None:
        """Close every handle, then raise CloseError for the first failure."""
        first: Optional[tuple[str, OSError]] = None
        failures = 0
        handles, names = self._handles, self._names
        self._handles, self._names, self._index = [], [], 0
        for name, fh in zip(names, handles):
            try:
                fh.close()
            except OSError as exc:
                failures += 1
                if first is None:
                    first = (name, exc)
        trace_io(self._log, 'closed', handles=len(handles), failures=failures)
        if first is not None:
            name, exc = first
            raise CloseError(name, exc, failures=failures) from exc

    def __enter__(self) -> 'ConcatenatingReader':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_files(
    paths: Sequence[str],
    filesystem: FilesystemProtocol,
    *,
    logger: Optional[logging.Logger] = None,
) -> ConcatenatingReader:
    """Open *paths* in order and return a reader over their contents.

    If any open fails, the handles opened so far are closed before the
    PathAccessError propagates.
    """
    with ExitStack() as stack:
        handles = [stack.enter_context(filesystem.open(p)) for p in paths]
        reader = ConcatenatingReader(handles, names=paths, logger=logger)
        stack.pop_all()
    return reader
