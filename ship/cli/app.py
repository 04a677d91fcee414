from __future__ import annotations

from typing import cast

import typer
from typer.core import TyperCommand

from ship import __version__
from ship.cli.commands.deploy import deploy
from ship.cli.commands.image import image
from ship.core.errors import ErrorCode

# Commands collect stray arguments themselves so they can report
# "Unknown option: <flag>" before touching the project.
_COMMAND_SETTINGS = {"ignore_unknown_options": True, "allow_extra_args": True}

# Newer typer releases vendor click under their own package. BadParameter is
# re-exported either way and derives from the parser's UsageError.
_UsageError = cast(type[Exception], typer.BadParameter.__base__)


class ReleaseCommand(TyperCommand):
    """Reports a malformed flag (`--patch=yes`) as one `error:` line, exit 1."""

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:  # pyright: ignore[reportIncompatibleMethodOverride]
        try:
            return super().parse_args(ctx, args)
        except _UsageError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.FAILURE)) from e


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


app.command(cls=ReleaseCommand, context_settings=_COMMAND_SETTINGS)(deploy)
app.command(cls=ReleaseCommand, context_settings=_COMMAND_SETTINGS)(image)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show ship version and exit.",
    ),
) -> None:
    """Release tooling: publish the package and its container image."""


def main() -> None:
    app()
