"""Explicit success/failure values.

Release steps return `Ok(value)` or `Err(error)` instead of raising, so the
coordinator can stop at the first failure and still run its cleanup:

    match manifest.read_field("version"):
        case Ok(version):
            console.info(f"Current version: {version}")
        case Err(error):
            print_release_error(error, console)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")

__all__ = ["Err", "Ok", "Result"]


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful step carrying its value."""

    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed step carrying its error."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Translate the error, e.g. a `GitError` into a release error."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
