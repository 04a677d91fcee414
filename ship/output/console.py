"""Console output abstraction.

Services write through `ConsoleProtocol` and never print directly. Each kind
of message carries a fixed label (`info:`, `OK`, `warning:`, `error:`) so
scripts wrapping a release can grep the output.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def command(self, args: Sequence[str]) -> None:
        """Echo a command line before it runs."""
        ...

    def newline(self) -> None: ...


class RichConsole:
    """Console implementation using Rich.

    Errors go to stderr, everything else to stdout. Messages are escaped, so
    text like `[tool.ship]` is printed literally rather than parsed as markup.
    """

    def __init__(self) -> None:
        from rich.console import Console

        self._console = Console(highlight=False)
        self._err_console = Console(stderr=True, highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        from rich.markup import escape

        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(escape(message), style=rich_style)
        else:
            self._console.print(escape(message))

    def success(self, message: str) -> None:
        from rich.markup import escape

        self._console.print(f"[green]OK[/green] {escape(message)}")

    def error(self, message: str) -> None:
        from rich.markup import escape

        self._err_console.print(f"[red bold]error:[/red bold] {escape(message)}")

    def warning(self, message: str) -> None:
        from rich.markup import escape

        self._console.print(f"[yellow]warning:[/yellow] {escape(message)}")

    def info(self, message: str) -> None:
        from rich.markup import escape

        self._console.print(f"[cyan]info:[/cyan] {escape(message)}")

    def command(self, args: Sequence[str]) -> None:
        self.print(f"$ {' '.join(args)}", Style.DIM)

    def newline(self) -> None:
        self._console.print()


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console that captures output for tests."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def command(self, args: Sequence[str]) -> None:
        self.outputs.append(OutputRecord(f"$ {' '.join(args)}", Style.DIM))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
