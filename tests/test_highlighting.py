"""Tests for JSON highlighting."""

import json
import re

from q3scoreboard.highlighting import highlight_json

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")

SAMPLE = json.dumps(
    {"game_1": {"total_kills": 3, "players": ["Zeh"], "scores": [["Zeh", -1]]}},
    indent=2,
)


class TestHighlightJson:
    """Tests for highlight_json."""

    def test_adds_ansi_colors(self):
        """Output contains ANSI escape sequences."""
        assert ANSI_ESCAPE.search(highlight_json(SAMPLE))

    def test_text_is_preserved(self):
        """Removing the escape sequences gives back the input."""
        assert ANSI_ESCAPE.sub("", highlight_json(SAMPLE)) == SAMPLE

    def test_standard_color_system(self):
        """Other color systems are accepted."""
        highlighted = highlight_json(SAMPLE, color_system="standard")

        assert ANSI_ESCAPE.sub("", highlighted) == SAMPLE
