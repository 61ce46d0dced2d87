from __future__ import annotations

from runparts.core.errors import (
    CloseError,
    ConfigurationError,
    PartsError,
    PathAccessError,
    ReadError,
)
from runparts.core.mode import (
    MODE_APPEND,
    MODE_CHAR_DEVICE,
    MODE_DEVICE,
    MODE_DIR,
    MODE_EXCLUSIVE,
    MODE_NAMED_PIPE,
    MODE_PERM,
    MODE_REGULAR,
    MODE_SETGID,
    MODE_SETUID,
    MODE_SOCKET,
    MODE_STICKY,
    MODE_SYMLINK,
    MODE_TEMPORARY,
    MODE_TYPE,
    FileMode,
    lstat_mode,
    mode_from_stat,
    stat_mode,
)
from runparts.core.models import (
    DEFAULT_MODE_PERM_FILTER,
    DEFAULT_MODE_TYPE_FILTER,
    DEFAULT_REGEXP_FILTER,
    EXECUTABLE_MODE_PERM_FILTER,
    EXECUTABLE_MODE_TYPE_FILTER,
    Config,
    default_config,
    new_config,
)
from runparts.discovery.path_resolver import PathResolver
from runparts.io.concat_reader import ConcatenatingReader, open_files
from runparts.io.filesystem import LocalFilesystem
from runparts.parts import Parts
from runparts.cli import RunParts

__version__ = '1.0.0'


__all__ = [
    'Parts',
    'RunParts',
    'Config',
    'new_config',
    'default_config',
    'FileMode',
    'stat_mode',
    'lstat_mode',
    'mode_from_stat',
    'PathResolver',
    'ConcatenatingReader',
    'open_files',
    'LocalFilesystem',
    'PartsError',
    'ConfigurationError',
    'PathAccessError',
    'ReadError',
    'CloseError',
    'DEFAULT_MODE_TYPE_FILTER',
    'DEFAULT_MODE_PERM_FILTER',
    'DEFAULT_REGEXP_FILTER',
    'EXECUTABLE_MODE_TYPE_FILTER',
    'EXECUTABLE_MODE_PERM_FILTER',
    'MODE_DIR',
    'MODE_APPEND',
    'MODE_EXCLUSIVE',
    'MODE_TEMPORARY',
    'MODE_SYMLINK',
    'MODE_DEVICE',
    'MODE_NAMED_PIPE',
    'MODE_SOCKET',
    'MODE_SETUID',
    'MODE_SETGID',
    'MODE_CHAR_DEVICE',
    'MODE_STICKY',
    'MODE_REGULAR',
    'MODE_TYPE',
    'MODE_PERM',
]
