"""
Log Summarization Pipeline

Runs log files through a LogMessageParser and a SummaryProcessor:

    line -> parser -> event -> summary processor -> JSON per finished match

Each file gets a fresh parser and processor; nothing is shared between
files. Files are processed one after another.
"""

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from q3scoreboard.core.config import Q3ScoreboardConfig
from q3scoreboard.core.errors import LineError, MessageParseError, Q3ScoreboardError
from q3scoreboard.core.utils import PerformanceMonitor
from q3scoreboard.parser import LogMessageParser
from q3scoreboard.reader import read_log_lines
from q3scoreboard.summary import SummaryProcessor

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Outcome of summarizing one log file."""

    path: Path
    lines_read: int = 0
    events: int = 0
    matches: list[str] = field(default_factory=list)  # rendered JSON documents
    error: Q3ScoreboardError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def summarize_lines(
    lines: Iterable[str],
    summaries: SummaryProcessor,
    parser: LogMessageParser | None = None,
    finish: bool = True,
) -> tuple[int, int]:
    """
    Feed log lines through a parser into a summary processor.

    Args:
        lines: Raw log lines
        summaries: Receives the events; outputs each finished match
        parser: Parser to use (a fresh one by default)
        finish: Output the match in progress when the lines run out

    Returns:
        (lines read, events produced)

    Raises:
        LineError: A line could not be parsed (cause chained)
        LogReadError: The lines come from a file that failed to read
    """
    parser = parser or LogMessageParser()
    lines_read = 0
    events = 0

    for line_number, line in enumerate(lines, start=1):
        lines_read = line_number
        try:
            event = parser.parse_line(line)
        except MessageParseError as e:
            raise LineError(line_number) from e

        if event is not None:
            events += 1
            summaries.process(event)

    if finish:
        summaries.finish()

    return lines_read, events


def summarize_file(
    path: str | Path,
    config: Q3ScoreboardConfig,
    sink: TextIO | None = None,
    colorize: bool = False,
) -> FileResult:
    """
    Summarize every match of one log file.

    Errors are not raised: the first failure stops this file and is
    stored in ``FileResult.error``. Matches output before the failure
    stay in ``FileResult.matches``.
    """
    path = Path(path)
    result = FileResult(path=path)

    summaries = SummaryProcessor(
        game_to_show=config.summary.game_to_show,
        sink=sink,
        colorize=colorize,
        world_id=config.parser.world_id,
        indent=config.output.json_indent,
        color_system=config.output.color_system,
    )
    parser = LogMessageParser(cause_marker=config.parser.cause_marker)

    try:
        with PerformanceMonitor(f"Summarizing {path}"):
            result.lines_read, result.events = summarize_lines(
                read_log_lines(path, encoding=config.parser.encoding),
                summaries,
                parser=parser,
                finish=config.summary.finish_unterminated,
            )
    except LineError as e:
        result.lines_read = e.line_number
        result.error = e
        logger.debug(f"Stopped processing {path} at line {e.line_number}")
    except Q3ScoreboardError as e:
        logger.debug(f"Stopped processing {path}: {e}")
        result.error = e

    result.matches = list(summaries.rendered)
    logger.info(
        f"{path}: {result.lines_read} lines, {result.events} events, "
        f"{len(result.matches)} matches shown"
    )
    return result


def summarize_files(
    paths: Iterable[str | Path],
    config: Q3ScoreboardConfig,
    sink: TextIO | None = None,
    colorize: bool = False,
    header: bool | None = None,
) -> list[FileResult]:
    """
    Summarize several log files, strictly one after another.

    A failure in one file does not stop the others.

    Args:
        header: Write a "==> path <==" line before each file's output.
            Defaults to True when more than one path is given.
    """
    paths = [Path(p) for p in paths]
    if header is None:
        header = len(paths) > 1

    results = []
    for i, path in enumerate(paths):
        if header:
            target = sink if sink is not None else sys.stdout
            prefix = "\n" if i > 0 else ""
            target.write(f"{prefix}==> {path} <==\n")
        results.append(summarize_file(path, config, sink=sink, colorize=colorize))

    return results
