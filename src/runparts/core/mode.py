from __future__ import annotations

"""File mode bit flags.

``FileMode`` layers its own type bits over the POSIX permission bits and adds
an explicit ``MODE_REGULAR`` bit. POSIX encodes a regular file as the absence
of every type bit, which cannot be selected with a mask; the explicit bit can.

Type bits live in the high bits of a 32-bit word and permission bits in the
low nine, so the two never overlap:

    >>> str(FileMode(MODE_REGULAR | 0o644))
    'frw-r--r--'
    >>> str(FileMode(MODE_DIR | 0o755))
    'drwxr-xr-x'
"""

import os
import stat
from typing import Union

from runparts.core.errors import PathAccessError


class FileMode(int):
    """Integer file mode whose bitwise operators keep the ``FileMode`` type."""

    __slots__ = ()

    def __or__(self, other: int) -> 'FileMode':
        return FileMode(int(self) | int(other))

    __ror__ = __or__

    def __and__(self, other: int) -> 'FileMode':
        return FileMode(int(self) & int(other))

    __rand__ = __and__

    def __xor__(self, other: int) -> 'FileMode':
        return FileMode(int(self) ^ int(other))

    __rxor__ = __xor__

    def __invert__(self) -> 'FileMode':
        return FileMode(~int(self) & 0xFFFFFFFF)

    def is_dir(self) -> bool:
        """Return True if the directory bit is set."""
        return bool(self & MODE_DIR)

    def is_regular(self) -> bool:
        """Return True for regular files.

        A raw POSIX-style value with no type bit at all also counts as regular.
        """
        if self & MODE_REGULAR:
            return True
        return not self & MODE_TYPE

    def is_executable(self) -> bool:
        """Return True for a regular file with any execute bit set."""
        return self.is_regular() and bool(self & 0o111)

    def perm(self) -> 'FileMode':
        """Return only the nine permission bits."""
        return self & MODE_PERM

    def render(self) -> str:
        out = [ch for bit, ch in _TYPE_CHARS if self & bit]
        if not out:
            out.append('-')
        for i, ch in enumerate('rwxrwxrwx'):
            out.append(ch if self & (1 << (8 - i)) else '-')
        return ''.join(out)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f'FileMode({self.render()!r})'


MODE_DIR = FileMode(1 << 31)          # d: directory
MODE_APPEND = FileMode(1 << 30)       # a: append-only
MODE_EXCLUSIVE = FileMode(1 << 29)    # l: exclusive use
MODE_TEMPORARY = FileMode(1 << 28)    # T: temporary file
MODE_SYMLINK = FileMode(1 << 27)      # L: symbolic link
MODE_DEVICE = FileMode(1 << 26)       # D: device file
MODE_NAMED_PIPE = FileMode(1 << 25)   # p: named pipe (FIFO)
MODE_SOCKET = FileMode(1 << 24)       # S: unix domain socket
MODE_SETUID = FileMode(1 << 23)       # u: setuid
MODE_SETGID = FileMode(1 << 22)       # g: setgid
MODE_CHAR_DEVICE = FileMode(1 << 21)  # c: character device, with MODE_DEVICE
MODE_STICKY = FileMode(1 << 20)       # t: sticky
MODE_REGULAR = FileMode(1 << 19)      # f: regular file

MODE_TYPE = MODE_DIR | MODE_SYMLINK | MODE_NAMED_PIPE | MODE_SOCKET | MODE_DEVICE | MODE_REGULAR
MODE_PERM = FileMode(0o777)

_TYPE_CHARS = tuple((FileMode(1 << (31 - i)), ch) for i, ch in enumerate('dalTLDpSugctf'))

_POSIX_TYPES = (
    (stat.S_ISDIR, MODE_DIR),
    (stat.S_ISLNK, MODE_SYMLINK),
    (stat.S_ISFIFO, MODE_NAMED_PIPE),
    (stat.S_ISSOCK, MODE_SOCKET),
    (stat.S_ISBLK, MODE_DEVICE),
    (stat.S_ISCHR, MODE_DEVICE | MODE_CHAR_DEVICE),
    (stat.S_ISREG, MODE_REGULAR),
)


def mode_from_stat(st_mode: int) -> FileMode:
    """Translate a POSIX ``st_mode`` into a ``FileMode``."""
    mode = FileMode(st_mode & MODE_PERM)
    for test, bits in _POSIX_TYPES:
        if test(st_mode):
            mode |= bits
            break
    if st_mode & stat.S_ISUID:
        mode |= MODE_SETUID
    if st_mode & stat.S_ISGID:
        mode |= MODE_SETGID
    if st_mode & stat.S_ISVTX:
        mode |= MODE_STICKY
    return mode


def stat_mode(path: Union[str, os.PathLike]) -> FileMode:
    """Return the mode of *path*, following symbolic links.

    Raises:
        PathAccessError: *path* does not exist or cannot be stat'd.
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        raise PathAccessError(os.fspath(path), exc.strerror or exc) from exc
    return mode_from_stat(st.st_mode)


def lstat_mode(path: Union[str, os.PathLike]) -> FileMode:
    """Like :func:`stat_mode` but describes a symbolic link itself."""
    try:
        st = os.lstat(path)
    except OSError as exc:
        raise PathAccessError(os.fspath(path), exc.strerror or exc) from exc
    return mode_from_stat(st.st_mode)
