from __future__ import annotations

"""Parsing of CLI mode masks.

Type masks are comma separated names (``regular,dir``) or ``all``;
permission masks are octal strings (``0111``, ``755``).
"""

import argparse
from typing import Dict

from runparts.core.mode import (
    MODE_DEVICE,
    MODE_DIR,
    MODE_NAMED_PIPE,
    MODE_PERM,
    MODE_REGULAR,
    MODE_SOCKET,
    MODE_SYMLINK,
    MODE_TYPE,
    FileMode,
)

TYPE_NAMES: Dict[str, FileMode] = {
    'regular': MODE_REGULAR,
    'file': MODE_REGULAR,
    'dir': MODE_DIR,
    'directory': MODE_DIR,
    'symlink': MODE_SYMLINK,
    'link': MODE_SYMLINK,
    'pipe': MODE_NAMED_PIPE,
    'fifo': MODE_NAMED_PIPE,
    'socket': MODE_SOCKET,
    'device': MODE_DEVICE,
    'all': MODE_TYPE,
}


def parse_type_mask(value: str) -> FileMode:
    """Parse ``regular,dir`` style type lists into a FileMode mask."""
    mask = FileMode(0)
    tokens = [tok.strip().lower() for tok in (value or '').split(',') if tok.strip()]
    if not tokens:
        raise argparse.ArgumentTypeError('empty type mask')
    for tok in tokens:
        bits = TYPE_NAMES.get(tok)
        if bits is None:
            choices = ', '.join(sorted(TYPE_NAMES))
            raise argparse.ArgumentTypeError(f'unknown file type {tok!r} (choose from {choices})')
        mask |= bits
    return mask


def parse_perm_mask(value: str) -> FileMode:
    """Parse an octal permission mask such as ``0111`` or ``0o644``."""
    raw = (value or '').strip().lower()
    if raw.startswith('0o'):
        raw = raw[2:]
    try:
        bits = int(raw, 8)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid octal permission mask {value!r}') from None
    if bits < 0 or bits & ~MODE_PERM:
        raise argparse.ArgumentTypeError(f'permission mask {value!r} is outside 0777')
    return FileMode(bits)
