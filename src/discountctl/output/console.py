"""Rich Console factory and theme for discountctl output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DISCOUNT_THEME = Theme(
    {
        "dc.ok": "bold green",
        "dc.error": "bold red",
        "dc.warning": "bold yellow",
        "dc.op": "bold cyan",
        "dc.key": "dim",
        "dc.amount": "magenta",
        "dc.discount": "bold green",
        "dc.none": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=DISCOUNT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
