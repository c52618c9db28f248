"""
Match Summary Builder

Folds parser events into per-match counters and renders each finished
match as a JSON scoreboard:

    {
      "game_1": {
        "total_kills": 3,
        "players": ["Isgalamido", "Mocinha"],
        "scores": [["Isgalamido", 2], ["Mocinha", -1]],
        "death_causes": {"MOD_FALLING": 1, "MOD_ROCKET": 2}
      }
    }

Scoring: a kill gives the killer one point, a death to the world
(killer == WORLD_ID) takes one point from the victim.
"""

import json
import logging
import sys
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, TextIO

from q3scoreboard.core.constants import MATCH_LABEL_PREFIX, UNKNOWN_PLAYER_NAME, WORLD_ID
from q3scoreboard.events import (
    BoundaryKind,
    Event,
    Kill,
    MatchBoundary,
    PlayerId,
    PlayerJoined,
    PlayerLeft,
    PlayerNameUpdate,
)
from q3scoreboard.highlighting import highlight_json

logger = logging.getLogger(__name__)


@dataclass
class MatchAccumulator:
    """Running totals for one match."""

    match_number: int = 0
    # False for activity before the first InitGame or between
    # ShutdownGame and the next InitGame; such totals are never shown
    live: bool = False

    total_kills: int = 0
    death_causes: Counter[str] = field(default_factory=Counter)
    scores: Counter[PlayerId] = field(default_factory=Counter)
    player_names: dict[PlayerId, str] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return f"{MATCH_LABEL_PREFIX}{self.match_number}"

    def player_name(self, player_id: PlayerId) -> str:
        return self.player_names.get(player_id, UNKNOWN_PLAYER_NAME.format(id=player_id))

    def to_dict(self) -> dict[str, Any]:
        """Scoreboard contents keyed by the match label."""
        return {
            self.label: {
                "total_kills": self.total_kills,
                "players": [self.player_names[pid] for pid in sorted(self.player_names)],
                "scores": [
                    [self.player_name(pid), self.scores[pid]] for pid in sorted(self.scores)
                ],
                "death_causes": dict(sorted(self.death_causes.items())),
            }
        }


def render_match(accumulator: MatchAccumulator, indent: int = 2) -> str:
    """Serialize a match scoreboard as pretty-printed JSON."""
    return json.dumps(accumulator.to_dict(), indent=indent, ensure_ascii=False)


class SummaryProcessor:
    """
    Processes events to build and output match summaries.

    A finished match is written to ``sink`` as JSON, highlighted when
    ``colorize`` is set. The caller decides ``colorize`` (usually from
    whether the sink is a terminal).

    Args:
        game_to_show: Only output this match number (all matches when None)
        sink: Where rendered matches are written (stdout by default)
        colorize: Highlight the JSON with ANSI colors
        world_id: Killer id meaning "killed by the world"
        indent: JSON indentation
        color_system: rich color system used when colorizing
    """

    def __init__(
        self,
        game_to_show: int | None = None,
        sink: TextIO | None = None,
        colorize: bool = False,
        world_id: int = WORLD_ID,
        indent: int = 2,
        color_system: str = "truecolor",
    ):
        self.game_to_show = game_to_show
        self.sink = sink
        self.colorize = colorize
        self.world_id = world_id
        self.indent = indent
        self.color_system = color_system
        self.current = MatchAccumulator()
        # Every match output so far, as plain (unhighlighted) JSON
        self.rendered: list[str] = []

    def process(self, event: Event) -> None:
        """Fold one event into the current match."""
        current = self.current

        if isinstance(event, Kill):
            current.total_kills += 1
            current.death_causes[event.cause] += 1

            if event.killer == self.world_id:
                current.scores[event.victim] -= 1
            else:
                current.scores[event.killer] += 1

        elif isinstance(event, PlayerJoined):
            current.scores[event.id] = 0
            current.player_names[event.id] = event.name

        elif isinstance(event, PlayerLeft):
            current.scores.pop(event.id, None)
            current.player_names.pop(event.id, None)

        elif isinstance(event, PlayerNameUpdate):
            current.player_names[event.id] = event.new_name

        elif isinstance(event, MatchBoundary):
            if event.kind == BoundaryKind.START:
                fresh = MatchAccumulator(match_number=current.match_number + 1, live=True)
            else:
                fresh = MatchAccumulator(match_number=current.match_number)

            previous, self.current = current, fresh
            self.flush(previous)

        else:
            raise TypeError(f"Unknown event: {event!r}")

    def finish(self) -> str | None:
        """
        Flush the match in progress at end of input.

        Only needed for logs whose last match has no ShutdownGame line.
        Calling it twice outputs nothing the second time.
        """
        previous = self.current
        self.current = MatchAccumulator(match_number=previous.match_number)
        return self.flush(previous)

    def flush(self, accumulator: MatchAccumulator) -> str | None:
        """
        Render and output a finished match.

        Returns:
            The rendered JSON, or None when the match is not shown
        """
        if not accumulator.live:
            return None
        if self.game_to_show is not None and accumulator.match_number != self.game_to_show:
            logger.debug(f"Skipping {accumulator.label} (showing game {self.game_to_show})")
            return None

        json_text = render_match(accumulator, self.indent)
        logger.debug(
            f"{accumulator.label}: {accumulator.total_kills} kills, "
            f"{len(accumulator.player_names)} players"
        )

        output = highlight_json(json_text, self.color_system) if self.colorize else json_text
        sink = self.sink if self.sink is not None else sys.stdout
        sink.write(output + "\n")

        self.rendered.append(json_text)
        return json_text
