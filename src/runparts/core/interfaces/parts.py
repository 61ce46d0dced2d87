from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PartsProtocol(Protocol):
    """A readable run-parts view that can also list its resolved names."""

    def readdirnames(self, n: int = 0) -> list[str]:
        """Return resolved paths in run-parts order, at most *n* when n > 0."""
        ...

    def read(self, size: int = -1) -> bytes:
        """Read from the concatenated contents; ``b''`` at end of stream."""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class ByteReaderProtocol(Protocol):
    """Sequential byte source with explicit release."""

    def read(self, size: int = -1) -> bytes:
        ...

    def readinto(self, buffer: bytearray | memoryview) -> int:
        ...

    def close(self) -> None:
        ...
