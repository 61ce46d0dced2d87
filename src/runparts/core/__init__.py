from __future__ import annotations

"""Public surface for runparts.core.

Stable import location for protocol types, the mode value type, the
configuration model and the error kinds:

    from runparts.core import Config, FileMode, PathAccessError, ...
"""

from runparts.core.interfaces import (
    ByteReaderProtocol,
    FilesystemProtocol,
    PartsProtocol,
    PathResolverProtocol,
)
from runparts.core.errors import (
    CloseError,
    ConfigurationError,
    PartsError,
    PathAccessError,
    ReadError,
)
from runparts.core.mode import FileMode, lstat_mode, stat_mode
from runparts.core.models import Config, default_config, new_config

__all__ = [
    # Protocols
    "ByteReaderProtocol",
    "FilesystemProtocol",
    "PartsProtocol",
    "PathResolverProtocol",
    # Errors
    "CloseError",
    "ConfigurationError",
    "PartsError",
    "PathAccessError",
    "ReadError",
    # Values
    "Config",
    "FileMode",
    "default_config",
    "new_config",
    "lstat_mode",
    "stat_mode",
]
