"""
console.py

Responsibility: All user-facing terminal output.

A `Console` is created once in `cli.main` and handed to whatever needs to print,
so colour handling lives in one object rather than in module-level constants.
rich drops styling on its own when the stream is not a terminal or NO_COLOR is set.
"""

from __future__ import annotations

from typing import IO

from rich.console import Console as RichConsole


class Console:
    def __init__(self, stdout: IO[str] | None = None, stderr: IO[str] | None = None) -> None:
        self._out = RichConsole(file=stdout, highlight=False, emoji=False, soft_wrap=True)
        self._err = RichConsole(file=stderr, stderr=stderr is None, highlight=False, emoji=False, soft_wrap=True)

    def _print(self, message: str, style: str | None = None) -> None:
        # Messages carry user data (paths, URLs); never treat them as markup.
        self._out.print(message, style=style, markup=False)

    def markup(self, text: str) -> None:
        """Print text containing rich markup tags, e.g. the usage screen."""
        self._out.print(text, end="")

    def plain(self, message: str) -> None:
        self._print(message)

    def blank(self) -> None:
        self._out.print()

    def header(self, title: str) -> None:
        self._print(title, style="bold cyan")

    def detail(self, message: str) -> None:
        self._print(message, style="dim")

    def step(self, message: str) -> None:
        self._print(message, style="yellow")

    def success(self, message: str) -> None:
        self._out.print("[green]✓[/green] ", end="")
        self._print(message)

    def error(self, message: str) -> None:
        self._err.print(f"Error: {message}", style="red", markup=False)
