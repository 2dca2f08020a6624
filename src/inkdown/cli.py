"""Command-line utilities for Inkdown.

``inkdown-render`` runs the send pipeline (normalise, then resolve inline
markdown) over markup read from a file or stdin, so that resolver behaviour
can be checked without starting the UI.
"""

from __future__ import annotations

import sys
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from inkdown.document import normalize, resolve

console = Console()

_USAGE = "Usage: inkdown-render [--plain] [FILE | -]"


def render_markup(raw: str) -> str:
    """The send pipeline without a session: normalise, then resolve."""
    return resolve(normalize(raw))


def _read_source(args: list[str]) -> str | None:
    if not args or args[0] == "-":
        return sys.stdin.read()
    path = Path(args[0])
    if not path.is_file():
        console.print(f"[red]No such file:[/] {path}")
        return None
    return path.read_text(encoding="utf-8")


def render() -> None:
    """Print the resolved form of markup from FILE (or stdin).

    Flags:
        --plain: Print the bare markup instead of a highlighted panel.
    """
    args = sys.argv[1:]
    if "-h" in args or "--help" in args:
        console.print(_USAGE)
        sys.exit(0)

    plain = "--plain" in args
    positional = [arg for arg in args if arg != "--plain"]
    if len(positional) > 1:
        console.print(f"[red]{_USAGE}[/]")
        sys.exit(2)

    raw = _read_source(positional)
    if raw is None:
        sys.exit(1)

    result = render_markup(raw.rstrip("\n"))
    if plain:
        print(result)
        return

    console.print(
        Panel(
            Syntax(result, "html", word_wrap=True),
            title="Resolved markup",
            border_style="blue",
        )
    )
