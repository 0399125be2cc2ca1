"""Operator input/output."""

from __future__ import annotations

from typing import Optional, Protocol, Union

from rich.console import Console
from rich.text import Text

Message = Union[str, Text]


class OperatorConsole(Protocol):
    """Line-based operator I/O used by the decision session"""

    def print_line(self, message: Message) -> None:
        ...

    def prompt_line(self, message: Message) -> str:
        ...


class RichConsole:
    """Terminal console; styled Text is rendered in colour when supported."""

    def __init__(self, colour: bool = True, console: Optional[Console] = None):
        self.console = console or Console(no_color=not colour, highlight=False, emoji=False)

    def print_line(self, message: Message) -> None:
        # Strings come from stored data and must not be read as markup
        self.console.print(message, markup=False)

    def prompt_line(self, message: Message) -> str:
        return self.console.input(message, markup=False).strip()
