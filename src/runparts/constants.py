from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling. Filter
presets live next to the configuration model in ``runparts.core.models``.
"""

# Chunk size used by the CLI when streaming contents to stdout.
STREAM_CHUNK_SIZE: int = 64 * 1024

# Environment switches read by the CLI and the logging helpers.
ENV_JSON_LOGS: str = 'RUNPARTS_JSON_LOGS'
ENV_TRACE_IO: str = 'RUNPARTS_TRACE_IO'
ENV_VERSION: str = 'RUNPARTS_VERSION'
