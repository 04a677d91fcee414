"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from ship.core.errors import ErrorCode
from ship.core.result import Err, Result
from ship.output.errors import print_release_error, release_error_exit_code
from ship.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from ship.output.console import ConsoleProtocol


T = TypeVar("T")


def unwrap_or_exit(result: Result[T, ReleaseError], console: ConsoleProtocol) -> T:
    """Return the Ok value, or print the error and exit with its code."""
    if isinstance(result, Err):
        print_release_error(result.error, console)
        raise typer.Exit(code=release_error_exit_code(result.error))
    return result.value


def fail(message: str, console: ConsoleProtocol) -> NoReturn:
    console.error(message)
    raise typer.Exit(code=int(ErrorCode.FAILURE))


def reject_extra_args(args: list[str]) -> None:
    """Fail on anything the command does not declare, naming the first offender.

    Runs before the context is built, so nothing has read the manifest yet.
    """
    if args:
        typer.echo(f"error: Unknown option: {args[0]}", err=True)
        raise typer.Exit(code=int(ErrorCode.FAILURE))
