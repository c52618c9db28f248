"""
Utility functions for q3scoreboard.

This module provides:
- Logging setup from LoggingConfig
- A timing context manager for logging how long a file took
"""

import logging
import sys
import time
from logging.handlers import RotatingFileHandler

from q3scoreboard.core.config import LoggingConfig

logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig) -> None:
    """
    Configure the root logger.

    Log records go to stderr, stdout is reserved for the JSON output.
    When ``config.file`` is set, records are also written to a rotating file.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if config.file:
        handlers.append(
            RotatingFileHandler(
                config.file,
                maxBytes=config.file_max_bytes,
                backupCount=config.file_backup_count,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=config.level.upper(),
        format=config.format,
        handlers=handlers,
        force=True,
    )


class PerformanceMonitor:
    """
    Context manager for logging how long a block of code took.

    Usage:
        with PerformanceMonitor("summarizing games.log"):
            summarize_file(...)
    """

    def __init__(self, operation_name: str, log_level: int = logging.DEBUG):
        self.operation_name = operation_name
        self.log_level = log_level
        self.start_time: float | None = None
        self.elapsed: float | None = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - (self.start_time or 0)
        if exc_type is not None:
            logger.log(self.log_level, f"{self.operation_name} failed after {format_duration(self.elapsed)}")
        else:
            logger.log(self.log_level, f"{self.operation_name} completed in {format_duration(self.elapsed)}")
        return False


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds to a human-readable string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string like "2m 30s", "1.5s" or "120ms"
    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
