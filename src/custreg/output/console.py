"""Theme and buffered console used by the human renderers.

Renderers print into a StringIO so ``format_result`` can return a plain
string; color is dropped automatically when stdout is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

KIND_STYLES: dict[str, str] = {
    "private": "green",
    "organization": "magenta",
}

REGISTRY_THEME = Theme(
    {
        "reg.ok": "bold green",
        "reg.error": "bold red",
        "reg.op": "bold cyan",
        "reg.key": "dim",
        "reg.id": "bold blue",
        "reg.field": "yellow",
        **{f"reg.kind.{kind}": style for kind, style in KIND_STYLES.items()},
    }
)


def buffered_console(width: int = 120) -> Console:
    return Console(file=StringIO(), theme=REGISTRY_THEME, highlight=False, width=width)


def drain(console: Console) -> str:
    """Return everything printed to a console made by :func:`buffered_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console is not buffered")
    return buffer.getvalue()


def style_for_kind(kind: str) -> str:
    return f"reg.kind.{kind}" if kind in KIND_STYLES else ""
