"""
q3scoreboard - Constants

Message tags, reserved identifiers and markers used by Quake 3 style
game server logs.
"""

from enum import StrEnum

# Killer id the server uses for environmental deaths (falling, lava, ...)
WORLD_ID = 1022

# Every mode-of-death token starts with this marker, e.g. "MOD_RAILGUN"
CAUSE_MARKER = "MOD_"

# Player name inside a ClientUserinfoChanged payload: "n\<name>\t\..."
NAME_LEFT_DELIMITER = "n\\"
NAME_RIGHT_DELIMITER = "\\t"

# Label used for every match in the rendered JSON: "game_1", "game_2", ...
MATCH_LABEL_PREFIX = "game_"

UNKNOWN_PLAYER_NAME = "<unknown player {id}>"


class MessageTag(StrEnum):
    """
    Message type prefixes recognized by the log parser.

    Order matters for dispatch: a tag that is a prefix of another one
    must come after it.
    """

    CLIENT_BEGIN = "ClientBegin:"
    CLIENT_CONNECT = "ClientConnect:"
    CLIENT_DISCONNECT = "ClientDisconnect:"
    CLIENT_USERINFO_CHANGED = "ClientUserinfoChanged:"
    KILL = "Kill:"
    INIT_GAME = "InitGame:"
    SHUTDOWN_GAME = "ShutdownGame:"


class ColorMode(StrEnum):
    """When to colorize JSON output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"
