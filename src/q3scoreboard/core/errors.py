"""
Error types for q3scoreboard.

Errors are layered: a handler raises a MessageError describing what is
wrong with the payload, the parser wraps it in a MessageParseError that
knows the message and its tag, and the pipeline wraps that again with the
line number. format_error_chain() walks the chain for display.
"""

from pathlib import Path


class Q3ScoreboardError(Exception):
    """Base class for every error raised by q3scoreboard."""


class ConfigError(Q3ScoreboardError):
    """A configuration file could not be read or has an unknown format."""


class LogReadError(Q3ScoreboardError):
    """A log file could not be opened or read."""

    def __init__(self, path: Path, message: str = "Failed to read log file"):
        self.path = Path(path)
        super().__init__(f"{message}: '{self.path}'")


class MessageError(Q3ScoreboardError):
    """The payload of a single log message is malformed."""


class MessageParseError(Q3ScoreboardError):
    """
    A recognized log message could not be parsed.

    Carries the message contents (timestamp and tag stripped) and the tag
    that selected the handler. The underlying MessageError is available as
    ``__cause__``.
    """

    def __init__(self, line: str, tag: str):
        self.line = line
        self.tag = tag
        super().__init__(f"Couldn't parse message of type '{tag}'")

    def context(self) -> list[str]:
        """Context layers between the headline and the cause, outermost first."""
        return [
            "Log file is corrupted or malformed",
            f"Log message: '{self.line}'",
        ]


class LineError(Q3ScoreboardError):
    """Wraps a parse failure with the 1-based line number it happened on."""

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"Failed to parse line {line_number}")


def format_error_chain(error: BaseException) -> str:
    """
    Render an exception and its causes as a human readable chain.

    Example:
        Error: Failed to parse line 12

        Caused by:
            0: Couldn't parse message of type 'Kill:'
            1: Log file is corrupted or malformed
            2: Log message: '1022 2 22: <world> killed Isgalamido by'
            3: Death cause missing from Kill message
    """
    layers: list[str] = []
    current: BaseException | None = error
    while current is not None:
        layers.append(str(current) or type(current).__name__)
        if isinstance(current, MessageParseError):
            layers.extend(current.context())
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )

    headline, causes = layers[0], layers[1:]
    lines = [f"Error: {headline}"]
    if causes:
        lines.append("")
        lines.append("Caused by:")
        lines.extend(f"    {i}: {cause}" for i, cause in enumerate(causes))
    return "\n".join(lines)
