"""
Token scanning helpers for log message payloads.

Log payloads are loosely structured: a few leading numeric ids separated
by spaces or colons, followed by free text. These helpers pull the ids
and embedded fields out without regular expressions.
"""

from collections.abc import Iterator

# Client ids are 16-bit unsigned integers
MAX_ID = 0xFFFF


def _is_separator(ch: str) -> bool:
    return ch.isspace() or ch == ":"


def _parse_unsigned(token: str) -> int | None:
    if token.isascii() and token.isdigit():
        value = int(token)
        if value <= MAX_ID:
            return value
    return None


class IdSequence:
    """
    Lazy sequence of numeric ids at the start of a message payload.

    Each step skips leading whitespace, reads up to the next whitespace or
    colon and parses that slice as an unsigned integer no larger than
    MAX_ID.

    Best-effort contract: the sequence ends silently as soon as no token is
    left or a token fails to parse. Callers asking for the first N ids get
    fewer than N items instead of an error, and must check for that.

    Iterating again restarts from the beginning of the text.

    Usage:
        >>> list(IdSequence("2 5:"))
        [2, 5]
        >>> list(IdSequence("1022 2 22: <world> killed"))
        [1022, 2, 22]
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[int]:
        remainder = self.text
        while True:
            remainder = remainder.lstrip()
            if not remainder:
                return

            end = 0
            while end < len(remainder) and not _is_separator(remainder[end]):
                end += 1

            value = _parse_unsigned(remainder[:end])
            if value is None:
                return
            yield value

            remainder = remainder[end:]

    def __repr__(self) -> str:
        return f"IdSequence({self.text!r})"


def parse_id(text: str) -> int | None:
    """
    Parse the first id of a payload.

    Returns:
        The id, or None when the payload is empty or starts with something
        that is not an unsigned integer.
    """
    return next(iter(IdSequence(text)), None)


def extract_delimited(text: str, left: str, right: str) -> str | None:
    """
    Extract the text framed by two delimiters.

    Splits once on the first ``left``, then splits what follows once on the
    first ``right``.

    Args:
        text: Text to search
        left: Opening delimiter
        right: Closing delimiter

    Returns:
        The text strictly between the delimiters, or None if either is missing.
    """
    _, found, after_left = text.partition(left)
    if not found:
        return None

    between, found, _ = after_left.partition(right)
    if not found:
        return None

    return between
