from __future__ import annotations

"""Small logging helpers to standardize runparts logger names, configuration and tracing.

This module provides:
    - JsonLogFormatter: JSON log formatter with stable fields and optional context.
    - setup_base_logger: Root logger configuration for the 'runparts' logger.
    - get_logger: Namespaced logger factory ('runparts.*').
    - trace_io utilities gated by RUNPARTS_TRACE_IO.

Library modules only ever log at debug level; errors are raised, not logged.
"""

import logging
import os
from typing import Optional, TextIO

from runparts.constants import ENV_TRACE_IO, ENV_VERSION


class JsonLogFormatter(logging.Formatter):
    """Emit logs as compact JSON with a fixed schema.

    Fields:
        - ts: ISO-8601 timestamp in UTC with millisecond precision.
        - level: Log level name.
        - module: Logger name (e.g., 'runparts.resolver').
        - msg: Formatted message string.
        - version: runparts.__version__ (fixed per formatter instance).
        - ctx: Optional dictionary attached to the record as 'context'.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = self._resolve_version()

    @staticmethod
    def _resolve_version() -> str:
        """Resolve the runparts version without importing at module load time.

        Returns:
            str: Version string or 'unknown' if it cannot be determined.
        """
        try:
            from runparts import __version__ as _v  # type: ignore
            return str(_v)
        except ImportError:
            return os.getenv(ENV_VERSION, "unknown")

    def format(self, record: logging.LogRecord) -> str:
        from datetime import datetime, timezone
        import json

        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        ts_str = ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")

        payload = {
            "ts": ts_str,
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }

        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure the base 'runparts' logger and return it.

    A second call only adjusts the level unless an explicit *stream* or a
    different output format is requested, in which case the handler is
    replaced.

    Args:
        json_logs: If True, configure a JSON formatter, else plain text.
        level: Logging level for the base logger.
        stream: Optional stream (stderr by default).

    Returns:
        The configured base logger.
    """
    import sys as _sys

    base = logging.getLogger("runparts")
    target = stream or _sys.stderr
    if base.handlers and stream is None and _is_json(base) == bool(json_logs):
        base.setLevel(level)
        return base

    base.handlers.clear()
    base.setLevel(level)
    base.propagate = False

    handler = logging.StreamHandler(target)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    base.addHandler(handler)

    return base


def _is_json(base: logging.Logger) -> bool:
    return any(isinstance(h.formatter, JsonLogFormatter) for h in base.handlers)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger under 'runparts'."""
    if not name or name == "runparts":
        return logging.getLogger("runparts")
    if name.startswith("runparts."):
        return logging.getLogger(name)
    return logging.getLogger(f"runparts.{name}")


def is_trace_io_enabled() -> bool:
    """Check if IO tracing is enabled via env flag."""
    return os.getenv(ENV_TRACE_IO) == "1"


def trace_io(logger: logging.Logger, message: str, **ctx) -> None:
    """Emit debug-verbosity IO trace messages only when enabled.

    Args:
        logger: Target logger.
        message: Human-readable description.
        **ctx: Optional structured context attached as the record 'context'.
    """
    if not is_trace_io_enabled():
        return
    if ctx:
        logger.debug("%s | ctx=%r", message, ctx, extra={"context": ctx})
    else:
        logger.debug("%s", message)
