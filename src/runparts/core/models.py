from __future__ import annotations

import re
from dataclasses import dataclass, field

from runparts.core.errors import ConfigurationError
from runparts.core.mode import MODE_PERM, MODE_REGULAR, FileMode

DEFAULT_MODE_TYPE_FILTER: FileMode = MODE_REGULAR
DEFAULT_MODE_PERM_FILTER: FileMode = MODE_PERM
EXECUTABLE_MODE_TYPE_FILTER: FileMode = MODE_REGULAR
EXECUTABLE_MODE_PERM_FILTER: FileMode = FileMode(0o111)
DEFAULT_REGEXP_FILTER: str = '.*'


@dataclass(frozen=True)
class Config:
    """Filtering and ordering options for a run-parts resolution.

    A file passes when its permission bits intersect ``mode_perm_filter``,
    its type bits intersect ``mode_type_filter`` and, for entries found by
    listing a directory, its base name matches ``regexp_filter``.
    """
    reverse: bool = False
    mode_type_filter: FileMode = DEFAULT_MODE_TYPE_FILTER
    mode_perm_filter: FileMode = DEFAULT_MODE_PERM_FILTER
    regexp_filter: re.Pattern = field(default_factory=lambda: re.compile(DEFAULT_REGEXP_FILTER))


def new_config(
    reverse: bool = False,
    mode_type_filter: int = DEFAULT_MODE_TYPE_FILTER,
    mode_perm_filter: int = DEFAULT_MODE_PERM_FILTER,
    regexp_filter: str = DEFAULT_REGEXP_FILTER,
) -> Config:
    """Build a Config, compiling *regexp_filter*.

    Raises:
        ConfigurationError: the pattern does not compile.
    """
    try:
        pattern = re.compile(regexp_filter)
    except re.error as exc:
        raise ConfigurationError(f'parts: {exc}') from exc
    return Config(
        reverse=bool(reverse),
        mode_type_filter=FileMode(mode_type_filter),
        mode_perm_filter=FileMode(mode_perm_filter),
        regexp_filter=pattern,
    )


def default_config() -> Config:
    """Forward order, regular files, any permission, any name."""
    return Config()
