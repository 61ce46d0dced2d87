from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import BinaryIO, NoReturn, Optional, Sequence

from runparts.constants import ENV_JSON_LOGS, STREAM_CHUNK_SIZE
from runparts.core.errors import PartsError
from runparts.core.models import (
    EXECUTABLE_MODE_PERM_FILTER,
    EXECUTABLE_MODE_TYPE_FILTER,
    Config,
    new_config,
)
from runparts.logging.factory import DefaultLoggerFactory
from runparts.logging.helpers import get_logger
from runparts.parsing.parser import _build_parser
from runparts.parts import Parts


logger = get_logger('runparts')


def _configure_logging(enable_json: bool, verbose: bool = False) -> None:
    """Configure process-wide logging, either JSON or plain text."""
    mode = (bool(enable_json), bool(verbose))
    prev = getattr(_configure_logging, '_configured_mode', None)
    if prev == mode:
        return
    level = logging.DEBUG if verbose else logging.INFO
    factory = DefaultLoggerFactory(json_logs=enable_json, level=level)
    global logger
    logger = factory.get_logger('runparts')
    setattr(_configure_logging, '_configured_mode', mode)


def _config_from_namespace(ns: argparse.Namespace) -> Config:
    """Translate parsed flags into a Config; --executables wins over -t/-p."""
    type_mask = EXECUTABLE_MODE_TYPE_FILTER if ns.executables else ns.type_mask
    perm_mask = EXECUTABLE_MODE_PERM_FILTER if ns.executables else ns.perm_mask
    return new_config(ns.reverse, type_mask, perm_mask, ns.regex)


def _write_names(parts: Parts, limit: int, out: BinaryIO) -> int:
    names = parts.readdirnames(limit)
    for name in names:
        out.write(os.fsencode(name) + b'\n')
    return len(names)


def _write_contents(parts: Parts, out: BinaryIO) -> int:
    total = 0
    with parts:
        while True:
            chunk = parts.read(STREAM_CHUNK_SIZE)
            if not chunk:
                break
            out.write(chunk)
            total += len(chunk)
    return total


class RunParts:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(argv: Sequence[str], *, stdout: Optional[BinaryIO] = None) -> int:
        """Run the tool with an argv-like sequence and return the exit code.

        Usage errors exit through argparse (code 2). Library errors are
        logged and mapped to exit code 1.
        """
        ns = _build_parser().parse_args(list(argv))
        json_logs = ns.json_logs or os.getenv(ENV_JSON_LOGS) == '1'
        _configure_logging(json_logs, ns.verbose)

        out = stdout if stdout is not None else sys.stdout.buffer
        try:
            config = _config_from_namespace(ns)
            parts = Parts(ns.paths, config, logger=get_logger('parts'))
            if ns.output == 'cat':
                n = _write_contents(parts, out)
                logger.debug('wrote %d byte(s)', n)
            else:
                n = _write_names(parts, ns.limit, out)
                logger.debug('listed %d name(s)', n)
            out.flush()
        except PartsError as exc:
            logger.error('%s', exc)
            return 1
        return 0


def main() -> NoReturn:
    """Entry point for the ``runparts`` console script."""
    try:
        raise SystemExit(RunParts.run(sys.argv[1:]))
    except KeyboardInterrupt:
        logger.error('Interrupted by user.')
        raise SystemExit(130)
    except BrokenPipeError:
        raise SystemExit(0)
    except SystemExit:
        raise
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
