"""
Log Message Parser for Quake 3 Server Logs

Turns raw log lines into higher-level events (see q3scoreboard.events).

The parser is stateful: player connection goes through several messages
(ClientConnect -> ClientUserinfoChanged -> ClientBegin) and the parser
tracks which players are still connecting and which already joined.
Unrelated lines are skipped.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from q3scoreboard.core.constants import (
    CAUSE_MARKER,
    NAME_LEFT_DELIMITER,
    NAME_RIGHT_DELIMITER,
    MessageTag,
)
from q3scoreboard.core.errors import MessageError, MessageParseError
from q3scoreboard.core.scanning import IdSequence, extract_delimited, parse_id
from q3scoreboard.events import (
    BoundaryKind,
    Event,
    Kill,
    MatchBoundary,
    PlayerId,
    PlayerJoined,
    PlayerLeft,
    PlayerName,
    PlayerNameUpdate,
)

logger = logging.getLogger(__name__)

Handler = Callable[["LogMessageParser", str], Event | None]


@dataclass
class ConnectionState:
    """
    Players known to the parser in the current match.

    An id is in at most one of the two mappings at a time.
    """

    # Mid-handshake players, name is None until ClientUserinfoChanged
    connecting: dict[PlayerId, PlayerName | None] = field(default_factory=dict)
    # Players that completed ClientBegin
    connected: dict[PlayerId, PlayerName] = field(default_factory=dict)

    def clear(self) -> None:
        self.connecting.clear()
        self.connected.clear()


def trim_timestamp(line: str) -> str:
    """
    Trim off the timestamp of a log line, return the remaining contents.

    The timestamp is the leading run of digits, colons and whitespace.
    A line made only of those characters is returned unchanged.
    """
    for position, ch in enumerate(line):
        if not (ch.isspace() or ch.isdigit() or ch == ":"):
            return line[position:]
    return line


class LogMessageParser:
    """
    Parses log messages into events.

    Usage:
        parser = LogMessageParser()
        for line in lines:
            event = parser.parse_line(line)
            if event is not None:
                summaries.process(event)
    """

    def __init__(self, cause_marker: str = CAUSE_MARKER):
        self.cause_marker = cause_marker
        self.state = ConnectionState()

    def parse_line(self, line: str) -> Event | None:
        """
        Parse one log line.

        Returns:
            The event this line completes, or None when the line is
            unrelated or only updates connection state.

        Raises:
            MessageParseError: The line has a known tag but a malformed payload.
        """
        message = trim_timestamp(line)

        for tag, handler in self._dispatch_table():
            if message.startswith(tag):
                break
        else:
            return None

        contents = message[len(tag):].strip()

        try:
            return handler(self, contents)
        except MessageError as e:
            raise MessageParseError(contents, tag) from e

    @classmethod
    def _dispatch_table(cls) -> tuple[tuple[str, Handler], ...]:
        # First match wins
        return (
            (MessageTag.CLIENT_BEGIN, cls._parse_client_begin),
            (MessageTag.CLIENT_CONNECT, cls._parse_client_connect),
            (MessageTag.CLIENT_DISCONNECT, cls._parse_client_disconnect),
            (MessageTag.CLIENT_USERINFO_CHANGED, cls._parse_client_info_changed),
            (MessageTag.KILL, cls._parse_kill),
            (MessageTag.INIT_GAME, cls._start_match),
            (MessageTag.SHUTDOWN_GAME, cls._end_match),
        )

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _parse_kill(self, kill_details: str) -> Event:
        ids = iter(IdSequence(kill_details))
        killer = next(ids, None)
        victim = next(ids, None)
        if killer is None or victim is None:
            raise MessageError("Kill messages expected killer and victim integer IDs")
        weapon = next(ids, None)

        marker_position = kill_details.rfind(self.cause_marker)
        if marker_position == -1:
            raise MessageError("Death cause missing from Kill message")

        return Kill(
            killer=killer,
            victim=victim,
            cause=kill_details[marker_position:],
            weapon=weapon,
        )

    def _start_match(self, _contents: str) -> Event:
        self.state.clear()
        return MatchBoundary(BoundaryKind.START)

    def _end_match(self, _contents: str) -> Event:
        self.state.clear()
        return MatchBoundary(BoundaryKind.END)

    def _parse_client_connect(self, contents: str) -> None:
        player_id = self._expect_id(contents, MessageTag.CLIENT_CONNECT)

        if player_id in self.state.connecting:
            # Duplicated message, or the previous connection never finished.
            # Keeping the existing entry is consistent either way.
            logger.debug(f"Ignoring repeated ClientConnect for player {player_id}")
            return None

        if self.state.connected.pop(player_id, None) is not None:
            logger.debug(f"Player {player_id} reconnected without disconnecting")
        self.state.connecting[player_id] = None
        return None

    def _parse_client_disconnect(self, contents: str) -> Event:
        player_id = self._expect_id(contents, MessageTag.CLIENT_DISCONNECT)

        tracked = player_id in self.state.connecting or player_id in self.state.connected
        self.state.connecting.pop(player_id, None)
        self.state.connected.pop(player_id, None)
        if not tracked:
            logger.debug(f"ClientDisconnect for untracked player {player_id}")

        return PlayerLeft(player_id)

    def _parse_client_begin(self, contents: str) -> Event | None:
        player_id = self._expect_id(contents, MessageTag.CLIENT_BEGIN)

        name = self.state.connecting.get(player_id)
        if name is None:
            if player_id in self.state.connected:
                logger.debug(f"Ignoring repeated ClientBegin for player {player_id}")
                return None
            raise MessageError(f"Player with ID {player_id} joined without a name")

        del self.state.connecting[player_id]
        self.state.connected[player_id] = name

        return PlayerJoined(player_id, name)

    def _parse_client_info_changed(self, contents: str) -> Event | None:
        player_id = self._expect_id(contents, MessageTag.CLIENT_USERINFO_CHANGED)

        name = extract_delimited(contents, NAME_LEFT_DELIMITER, NAME_RIGHT_DELIMITER)
        if name is None:
            raise MessageError(
                f"Expected player name delimited by '{NAME_LEFT_DELIMITER}' "
                f"and '{NAME_RIGHT_DELIMITER}'"
            )

        # Either a connecting client sends its data, or a joined one updates it
        if player_id in self.state.connecting:
            self.state.connecting[player_id] = name
            return None

        if player_id in self.state.connected:
            self.state.connected[player_id] = name
        return PlayerNameUpdate(player_id, name)

    @staticmethod
    def _expect_id(contents: str, tag: str) -> PlayerId:
        player_id = parse_id(contents)
        if player_id is None:
            raise MessageError(f"Expected a client integer ID from '{tag}' message")
        return player_id
