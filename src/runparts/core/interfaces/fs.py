from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol, Sequence, runtime_checkable

from runparts.core.mode import FileMode

if TYPE_CHECKING:
    from runparts.core.models import Config


@runtime_checkable
class FilesystemProtocol(Protocol):
    """Blocking filesystem capabilities needed to resolve and read parts."""

    def stat_mode(self, path: str) -> FileMode:
        ...

    def lstat_mode(self, path: str) -> FileMode:
        ...

    def listdir(self, path: str) -> list[str]:
        ...

    def open(self, path: str) -> BinaryIO:
        ...


@runtime_checkable
class PathResolverProtocol(Protocol):
    def resolve(self, paths: Sequence[str], config: Config, limit: int = 0) -> list[str]:
        ...
