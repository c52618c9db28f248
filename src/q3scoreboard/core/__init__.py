"""
q3scoreboard Core - Foundation modules for log parsing.

This module contains the fundamental components:
- constants: Message tags, reserved ids and markers
- config: Application configuration management
- errors: Exception hierarchy and error chain formatting
- scanning: Token and delimited-text scanning of message payloads
- utils: Logging setup and timing helpers
"""

from q3scoreboard.core.constants import (
    CAUSE_MARKER,
    MATCH_LABEL_PREFIX,
    NAME_LEFT_DELIMITER,
    NAME_RIGHT_DELIMITER,
    WORLD_ID,
    ColorMode,
    MessageTag,
)
from q3scoreboard.core.errors import (
    ConfigError,
    LineError,
    LogReadError,
    MessageError,
    MessageParseError,
    Q3ScoreboardError,
    format_error_chain,
)
from q3scoreboard.core.scanning import IdSequence, extract_delimited, parse_id

__all__ = [
    # Enums
    "ColorMode",
    "MessageTag",
    # Constants
    "CAUSE_MARKER",
    "MATCH_LABEL_PREFIX",
    "NAME_LEFT_DELIMITER",
    "NAME_RIGHT_DELIMITER",
    "WORLD_ID",
    # Errors
    "ConfigError",
    "LineError",
    "LogReadError",
    "MessageError",
    "MessageParseError",
    "Q3ScoreboardError",
    "format_error_chain",
    # Scanning
    "IdSequence",
    "extract_delimited",
    "parse_id",
]
