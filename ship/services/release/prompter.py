"""Question/answer seam between release decisions and the terminal.

The coordinator only asks questions through `Prompter`, so tests drive a full
release with `ScriptedPrompter` instead of a TTY.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import typer

__all__ = ["Prompter", "ScriptedPrompter", "TerminalPrompter"]

_YES = frozenset({"y", "yes"})


class Prompter(Protocol):
    def ask(self, message: str) -> str:
        """Ask a free-form question; blocks until answered."""
        ...

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...


class TerminalPrompter:
    def ask(self, message: str) -> str:
        return str(typer.prompt(message, default="", show_default=False))

    def confirm(self, message: str, *, default: bool = False) -> bool:
        return typer.confirm(message, default=default)


def _empty_questions() -> list[str]:
    return []


@dataclass
class ScriptedPrompter:
    """Replays canned answers in order and records every question asked.

    Once the answers run out, `ask` returns "". An empty or missing answer
    to `confirm` gives its default, as pressing Enter does at a terminal.
    """

    answers: deque[str] = field(default_factory=deque)
    asked: list[str] = field(default_factory=_empty_questions)

    @classmethod
    def of(cls, answers: Iterable[str]) -> ScriptedPrompter:
        return cls(answers=deque(answers))

    def ask(self, message: str) -> str:
        self.asked.append(message)
        return self.answers.popleft() if self.answers else ""

    def confirm(self, message: str, *, default: bool = False) -> bool:
        self.asked.append(message)
        reply = self.answers.popleft().strip().lower() if self.answers else ""
        if not reply:
            return default
        return reply in _YES
