# runparts/parsing/parser.py
from __future__ import annotations

import argparse

from runparts.core.models import (
    DEFAULT_MODE_PERM_FILTER,
    DEFAULT_MODE_TYPE_FILTER,
    DEFAULT_REGEXP_FILTER,
)
from runparts.parsing.masks import parse_perm_mask, parse_type_mask


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid limit {value!r}') from None
    if n < 0:
        raise argparse.ArgumentTypeError('limit must be >= 0')
    return n


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser.

    Notes:
        - PATH order is precedence order: a base name found in an earlier
          PATH hides the same name in later ones.
        - Only one directory level is listed per PATH.
    """
    p = argparse.ArgumentParser(
        prog="runparts",
        formatter_class=argparse.RawTextHelpFormatter,
        usage="%(prog)s [OPTIONS] PATH [PATH …]",
        description=(
            "runparts – list or concatenate files from run-parts style directories\n"
            "Files from earlier PATHs override files with the same name in later ones."
        ),
    )

    g_sel = p.add_argument_group("Selection")
    g_out = p.add_argument_group("Output")
    g_misc = p.add_argument_group("Miscellaneous")

    p.add_argument(
        "paths",
        metavar="PATH",
        nargs="+",
        help="File or directory to merge, highest precedence first.",
    )

    # -----------------------
    # Selection
    # -----------------------
    g_sel.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        dest="reverse",
        help="Sort names in descending order.",
    )
    g_sel.add_argument(
        "-t",
        "--type",
        metavar="TYPES",
        type=parse_type_mask,
        dest="type_mask",
        default=DEFAULT_MODE_TYPE_FILTER,
        help=(
            "Comma separated file types to keep: regular, dir, symlink, pipe, "
            "socket, device or all. Default: regular."
        ),
    )
    g_sel.add_argument(
        "-p",
        "--perm",
        metavar="OCTAL",
        type=parse_perm_mask,
        dest="perm_mask",
        default=DEFAULT_MODE_PERM_FILTER,
        help=(
            "Permission mask in octal. An entry is kept when it shares ANY bit "
            "with the mask (0111 keeps anything executable by someone). "
            "Default: 0777."
        ),
    )
    g_sel.add_argument(
        "-e",
        "--regex",
        metavar="PATTERN",
        dest="regex",
        default=DEFAULT_REGEXP_FILTER,
        help=(
            "Regular expression searched in the base name of directory entries. "
            "Files given directly as PATH are not matched against it."
        ),
    )
    g_sel.add_argument(
        "-x",
        "--executables",
        action="store_true",
        dest="executables",
        help="Shortcut for '--type regular --perm 0111'.",
    )
    g_sel.add_argument(
        "-n",
        "--limit",
        metavar="N",
        type=_non_negative_int,
        dest="limit",
        default=0,
        help="Return at most N names (0 = all). Applies to --list only.",
    )

    # -----------------------
    # Output
    # -----------------------
    mode = g_out.add_mutually_exclusive_group()
    mode.add_argument(
        "-l",
        "--list",
        action="store_const",
        const="list",
        dest="output",
        help="Print resolved paths, one per line (default).",
    )
    mode.add_argument(
        "-c",
        "--cat",
        action="store_const",
        const="cat",
        dest="output",
        help="Write the concatenated contents of the resolved files.",
    )
    p.set_defaults(output="list")

    # -----------------------
    # Miscellaneous
    # -----------------------
    g_misc.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit logs as JSON lines on stderr.",
    )
    g_misc.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Enable debug logging.",
    )
    return p
