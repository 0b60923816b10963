"""Rich Console factory and theme for wikigraph output.

Consoles render into a StringIO buffer so ``format_result() -> str`` stays
a pure function. In non-TTY environments (tests, pipes) Rich drops color
codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

WIKIGRAPH_THEME = Theme(
    {
        "wg.ok": "bold green",
        "wg.error": "bold red",
        "wg.warning": "bold yellow",
        "wg.op": "bold cyan",
        "wg.key": "dim",
        "wg.path": "bold blue",
        "wg.title": "bold",
        "wg.missing": "red",
        "wg.count": "magenta",
    }
)


# Output is captured into a buffer, never sized to the real terminal.
_CONSOLE_WIDTH = 120


def create_console() -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=WIKIGRAPH_THEME,
        highlight=False,
        width=_CONSOLE_WIDTH,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
