"""
Buffered line reading for log files.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from q3scoreboard.core.errors import LogReadError

logger = logging.getLogger(__name__)

READ_BUFFER_SIZE = 8 * 1024


def read_log_lines(path: str | Path, encoding: str = "utf-8") -> Iterator[str]:
    """
    Yield the lines of a log file without their line endings.

    The file is opened lazily, on the first ``next()``.

    Raises:
        LogReadError: The file can't be opened or decoded. The original
            OSError/UnicodeDecodeError is chained as the cause.
    """
    path = Path(path)

    try:
        log_file = open(path, encoding=encoding, buffering=READ_BUFFER_SIZE)
    except OSError as e:
        raise LogReadError(path, "Failed to open log file for reading") from e

    logger.debug(f"Reading {path}")
    with log_file:
        try:
            for line in log_file:
                yield line.rstrip("\r\n")
        except (OSError, UnicodeDecodeError) as e:
            raise LogReadError(path) from e
