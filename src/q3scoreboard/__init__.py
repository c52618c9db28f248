"""
q3scoreboard - Match Scoreboards from Quake 3 Server Logs

Reads Quake 3 style game server logs and outputs one JSON scoreboard per
match: total kills, players, scores and death causes.

Usage:
    from q3scoreboard import LogMessageParser, SummaryProcessor

    parser = LogMessageParser()
    summaries = SummaryProcessor()

    for line in open("games.log"):
        event = parser.parse_line(line)
        if event is not None:
            summaries.process(event)
    summaries.finish()
"""

__version__ = "0.3.0"
__author__ = "q3scoreboard Contributors"


def __getattr__(name):
    """Lazy import so `q3scoreboard.__version__` doesn't load the CLI stack."""
    if name == "LogMessageParser":
        from q3scoreboard.parser import LogMessageParser
        return LogMessageParser
    elif name == "SummaryProcessor":
        from q3scoreboard.summary import SummaryProcessor
        return SummaryProcessor
    elif name == "summarize_file":
        from q3scoreboard.pipeline import summarize_file
        return summarize_file
    elif name == "summarize_files":
        from q3scoreboard.pipeline import summarize_files
        return summarize_files
    raise AttributeError(f"module 'q3scoreboard' has no attribute '{name}'")


__all__ = [
    # Version
    "__version__",
    # Core
    "LogMessageParser",
    "SummaryProcessor",
    "summarize_file",
    "summarize_files",
]
