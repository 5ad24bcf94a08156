"""Operator-facing output.

Stages never print directly; they talk to a ``Reporter``. ``RichReporter`` is
the terminal implementation, built on the shared Rich console. Tests swap in
a recording implementation so stage logic can be checked without a terminal.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from nextboil.utils import console as default_console


class Reporter(Protocol):
    """Sink for progress and outcome messages."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def status(self, message: str) -> AbstractContextManager[None]: ...

    def banner(self, title: str, subtitle: str = "") -> None: ...

    def summary(self, rows: dict[str, str], title: str = "Summary") -> None: ...


class RichReporter:
    """Reporter that renders to a Rich console.

    Messages are escaped before printing, so project names or URLs that
    contain square brackets are shown verbatim instead of being parsed as
    markup.

    Attributes:
        console: Target console. Defaults to the shared module console.
        verbose: When ``False``, ``debug`` messages are dropped.
    """

    def __init__(self, console: Console | None = None, verbose: bool = False) -> None:
        self.console = console or default_console
        self.verbose = verbose

    def info(self, message: str) -> None:
        self.console.print(f"[blue]{escape(message)}[/blue]")

    def success(self, message: str) -> None:
        self.console.print(f"[bold green]{escape(message)}[/bold green]")

    def warn(self, message: str) -> None:
        self.console.print(f"[bold yellow]{escape(message)}[/bold yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]{escape(message)}[/bold red]")

    def debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[dim]\\[DEBUG] {escape(message)}[/dim]")

    @contextmanager
    def status(self, message: str) -> Iterator[None]:
        """Show a spinner with *message* for the duration of the block."""
        with self.console.status(f"[cyan]{escape(message)}[/cyan]"):
            yield

    def banner(self, title: str, subtitle: str = "") -> None:
        self.console.print()
        self.console.print(
            Rule(f"[bold bright_blue] {escape(title)} [/bold bright_blue]", style="bright_blue")
        )
        if subtitle:
            self.console.print(f"[dim]{escape(subtitle)}[/dim]", justify="center")
        self.console.print()

    def summary(self, rows: dict[str, str], title: str = "Summary") -> None:
        """Print a two-column key/value table inside a green panel."""
        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("Item", style="dim", no_wrap=True)
        table.add_column("Value", style="bold")

        for key, value in rows.items():
            table.add_row(escape(key), escape(str(value)))

        self.console.print(
            Panel(table, title=f"[bold]{escape(title)}[/bold]", border_style="green", expand=False)
        )
