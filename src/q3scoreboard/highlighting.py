"""
JSON highlighting for ANSI-capable terminals.

Uses rich's JSON highlighter so colors match the rest of the CLI output.
"""

from io import StringIO

from rich.console import Console
from rich.highlighter import JSONHighlighter

_highlighter = JSONHighlighter()


def highlight_json(json_text: str, color_system: str = "truecolor") -> str:
    """
    Colorize a JSON document with ANSI escape sequences.

    The text itself is not reformatted, only styled; stripping the escape
    sequences gives back the input.

    Args:
        json_text: Serialized JSON
        color_system: rich color system ("standard", "256" or "truecolor")

    Returns:
        The highlighted text
    """
    buffer = StringIO()
    console = Console(
        file=buffer,
        force_terminal=True,
        color_system=color_system,
        soft_wrap=True,
        highlight=False,
        emoji=False,
        markup=False,
        no_color=False,
    )
    console.print(_highlighter(json_text), end="")
    return buffer.getvalue()
