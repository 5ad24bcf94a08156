"""Interactive confirmation.

The directory reconciler depends on the ``Confirmer`` protocol rather than on
the terminal, so callers decide how a destructive-action question is answered.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from nextboil.utils import console as default_console


class Confirmer(Protocol):
    """Answers a yes/no question."""

    def confirm(self, message: str) -> bool: ...


class ConsoleConfirmer:
    """Asks on the terminal. Anything but an explicit yes counts as no."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def confirm(self, message: str) -> bool:
        return Confirm.ask(
            f"[yellow]{escape(message)}[/yellow]",
            default=False,
            console=self.console,
        )
