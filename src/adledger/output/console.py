"""Rich Console factory and theme for adledger output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LEDGER_THEME = Theme(
    {
        "ledger.ok": "bold green",
        "ledger.error": "bold red",
        "ledger.warning": "bold yellow",
        "ledger.op": "bold cyan",
        "ledger.key": "dim",
        "ledger.id": "bold blue",
        "ledger.amount": "magenta",
        "ledger.status.OPEN": "green",
        "ledger.status.CLOSED": "yellow",
        "ledger.status.BOUGHT": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=LEDGER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for an ad status."""
    if status in ("OPEN", "CLOSED", "BOUGHT"):
        return f"ledger.status.{status}"
    return ""
