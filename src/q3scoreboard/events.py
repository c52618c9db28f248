"""
Events emitted by the log parser.

Think of each line in a log file as a "message". An event is the
higher-level meaning of one or more messages:

1. Some events are built from several messages. A PlayerJoined event only
   comes out after ClientConnect, ClientUserinfoChanged and ClientBegin.
2. The same message can mean different things in different contexts
   (ClientUserinfoChanged either names a connecting player or renames a
   joined one), while each event has exactly one meaning.
"""

from dataclasses import dataclass
from enum import StrEnum

PlayerId = int
PlayerName = str


class BoundaryKind(StrEnum):
    """Which marker produced a match boundary."""

    START = "start"  # InitGame
    END = "end"  # ShutdownGame


@dataclass(frozen=True)
class Kill:
    """
    A player was killed by something or someone.

    The killer may be another player or the world (WORLD_ID).
    """

    killer: PlayerId
    victim: PlayerId
    cause: str  # e.g. "MOD_RAILGUN"
    weapon: int | None = None


@dataclass(frozen=True)
class MatchBoundary:
    """
    The point separating two consecutive matches.

    There is no separate "match started" event: everything after a START
    boundary belongs to a new match.
    """

    kind: BoundaryKind = BoundaryKind.START


@dataclass(frozen=True)
class PlayerJoined:
    """A player finished connecting and entered the current match."""

    id: PlayerId
    name: PlayerName


@dataclass(frozen=True)
class PlayerLeft:
    """A player left the current match."""

    id: PlayerId


@dataclass(frozen=True)
class PlayerNameUpdate:
    """A joined player changed their name."""

    id: PlayerId
    new_name: PlayerName


Event = Kill | MatchBoundary | PlayerJoined | PlayerLeft | PlayerNameUpdate
