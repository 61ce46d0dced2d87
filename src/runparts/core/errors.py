from __future__ import annotations

"""Error kinds raised by runparts.

Every error is raised to the immediate caller. Nothing in the library logs
an error and carries on, and nothing is retried.
"""

from typing import Optional


class PartsError(Exception):
    """Base class for all runparts errors."""


class ConfigurationError(PartsError, ValueError):
    """The name pattern of a configuration could not be compiled."""


class PathAccessError(PartsError, OSError):
    """A configured path could not be stat'd, listed or opened."""

    def __init__(self, path: str, reason: object) -> None:
        super().__init__(f'parts: {path}: {reason}')
        self.path = path


class ReadError(PartsError, OSError):
    """An I/O failure happened while streaming file contents."""

    def __init__(self, path: Optional[str], reason: object) -> None:
        super().__init__(f'parts: read {path}: {reason}')
        self.path = path


class CloseError(PartsError, OSError):
    """At least one open handle failed to close.

    ``failures`` holds the number of handles that failed; the first failure
    is chained as ``__cause__``.
    """

    def __init__(self, path: Optional[str], reason: object, *, failures: int = 1) -> None:
        super().__init__(f'parts: close {path}: {reason}')
        self.path = path
        self.failures = failures
