"""Rich Console factory and theme for layergroups output.

Consoles render into a StringIO buffer so renderers return plain strings
for ``click.echo``. Rich drops color codes when the buffer is not a TTY,
which keeps piped output and CliRunner captures clean.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LG_THEME = Theme(
    {
        "lg.ok": "bold green",
        "lg.error": "bold red",
        "lg.op": "bold cyan",
        "lg.key": "dim",
        "lg.id": "bold blue",
        "lg.group": "magenta",
        "lg.fragmented": "yellow",
    }
)

CONSOLE_WIDTH = 120


def create_console() -> Console:
    """Console writing to a fresh StringIO buffer with the layergroups theme."""
    return Console(
        file=StringIO(),
        theme=LG_THEME,
        highlight=False,
        width=CONSOLE_WIDTH,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
