from __future__ import annotations

"""
Run-parts name resolution.

Paths are processed in the order given. A directory contributes its direct
children (no recursion); any other path contributes itself. The first path to
provide a given base name owns it, so earlier paths override later ones:

    ── etc
    │   └── 10-both.conf        <- wins
    └── usr/lib
        ├── 10-both.conf        <- shadowed
        └── 20-only-lib.conf

Surviving entries are filtered by type, permission and (for directory
children only) name pattern, then sorted by base name.
"""

import logging
import os
import re
from typing import Dict, Iterator, List, Optional, Sequence

from runparts.core.interfaces.fs import FilesystemProtocol, PathResolverProtocol
from runparts.core.mode import FileMode
from runparts.core.models import Config
from runparts.io.filesystem import LocalFilesystem
from runparts.logging.helpers import get_logger, trace_io


def base_name(path: str) -> str:
    """Final path component, ignoring a trailing separator."""
    stripped = path.rstrip(os.sep) if path != os.sep else path
    return os.path.basename(stripped) or stripped


class NameRegistry:
    """Base name -> full path mapping where the first registration wins."""

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, name: str) -> Optional[str]:
        return self._entries.get(name)

    def insert_if_absent(self, name: str, full_path: str) -> bool:
        """Record *full_path* under *name* unless the name is taken.

        Returns True when the entry was recorded.
        """
        if name in self._entries:
            return False
        self._entries[name] = full_path
        return True

    def paths(self) -> List[str]:
        return list(self._entries.values())


def matches_filter(
    name: str,
    mode: FileMode,
    config: Config,
    pattern: Optional[re.Pattern] = None,
) -> bool:
    """Return True if an entry passes the configured filters.

    Masks match on intersection: any shared bit is enough. *pattern* is
    searched in *name* when given.
    """
    if pattern is not None and not pattern.search(name):
        return False
    if not mode & config.mode_perm_filter:
        return False
    if not mode & config.mode_type_filter:
        return False
    return True


def sort_by_base_name(paths: Sequence[str], *, reverse: bool = False) -> List[str]:
    return sorted(paths, key=base_name, reverse=reverse)


def apply_limit(paths: List[str], limit: int) -> List[str]:
    """First *limit* entries when 0 < limit < len(paths), otherwise all."""
    if 0 < limit < len(paths):
        return paths[:limit]
    return paths


class PathResolver(PathResolverProtocol):
    """Resolve an ordered list of files and directories into run-parts order."""

    def __init__(
        self,
        *,
        filesystem: Optional[FilesystemProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._fs: FilesystemProtocol = filesystem or LocalFilesystem()
        self._log = logger or get_logger('resolver')

    def resolve(self, paths: Sequence[str], config: Config, limit: int = 0) -> List[str]:
        """Return matching full paths sorted by base name.

        Raises:
            PathAccessError: a path could not be stat'd or a directory could
                not be listed. Nothing is returned in that case.
        """
        found = NameRegistry()
        for path in paths:
            path = os.fspath(path)
            mode = self._fs.stat_mode(path)
            if mode.is_dir():
                self._collect_dir(path, config, found)
            else:
                self._collect_file(path, mode, config, found)

        names = sort_by_base_name(found.paths(), reverse=config.reverse)
        trace_io(self._log, 'resolved', inputs=len(paths), matched=len(names), limit=limit)
        return apply_limit(names, limit)

    def _collect_dir(self, path: str, config: Config, found: NameRegistry) -> None:
        for name in self._fs.listdir(path):
            if name in found:
                trace_io(self._log, 'shadowed', name=name, by=found.get(name), skipped=path)
                continue
            full_path = os.path.join(path, name)
            mode = self._fs.stat_mode(full_path)
            if matches_filter(name, mode, config, config.regexp_filter):
                found.insert_if_absent(name, full_path)

    def _collect_file(self, path: str, mode: FileMode, config: Config, found: NameRegistry) -> None:
        name = base_name(path)
        if name in found:
            trace_io(self._log, 'shadowed', name=name, by=found.get(name), skipped=path)
            return
        # Explicitly listed files are taken as chosen: no name pattern.
        if matches_filter(name, mode, config):
            found.insert_if_absent(name, path)
