from __future__ import annotations

import typer

from ship.cli.commands._helpers import fail, reject_extra_args, unwrap_or_exit
from ship.cli.context import build_context
from ship.git.repository import Repository
from ship.services.release.coordinator import ReleaseCoordinator, ReleaseOptions
from ship.services.release.publish import Publisher
from ship.services.release.semver import BumpKind


def _selected_bumps(*, patch: bool, minor: bool, major: bool, no_bump: bool) -> list[BumpKind]:
    return [
        kind
        for kind, flag in (
            (BumpKind.PATCH, patch),
            (BumpKind.MINOR, minor),
            (BumpKind.MAJOR, major),
            (BumpKind.NONE, no_bump),
        )
        if flag
    ]


def deploy(
    ctx: typer.Context,
    show_version: bool = typer.Option(False, "-v", "--version", help="Show current version"),
    patch: bool = typer.Option(False, "--patch", help="Bump patch version (0.1.0 -> 0.1.1)"),
    minor: bool = typer.Option(False, "--minor", help="Bump minor version (0.1.0 -> 0.2.0)"),
    major: bool = typer.Option(False, "--major", help="Bump major version (0.1.0 -> 1.0.0)"),
    no_bump: bool = typer.Option(False, "--no-bump", help="Don't bump version"),
    no_tag: bool = typer.Option(False, "--no-tag", help="Don't create git tag"),
    test: bool = typer.Option(False, "--test", help="Upload to TestPyPI instead of PyPI"),
) -> None:
    """Bump the version, build the package and upload it.

    Without a bump flag, asks which version component to bump.
    """
    reject_extra_args(ctx.args)
    cli = build_context(with_config=not show_version)

    if show_version:
        version = unwrap_or_exit(cli.manifest.read_field("version"), cli.console)
        cli.console.print(f"Current version: {version}")
        raise typer.Exit(code=0)

    selected = _selected_bumps(patch=patch, minor=minor, major=major, no_bump=no_bump)
    if len(selected) > 1:
        fail("--patch, --minor, --major and --no-bump are mutually exclusive", cli.console)
    bump = selected[0] if selected else None

    coordinator = ReleaseCoordinator(
        manifest=cli.manifest,
        config=cli.config,
        console=cli.console,
        prompter=cli.prompter,
        git=Repository(cli.root),
        publisher=Publisher(root=cli.root, console=cli.console),
    )
    unwrap_or_exit(
        coordinator.run(
            ReleaseOptions(bump=bump, create_tag=not no_tag, use_test_registry=test),
        ),
        cli.console,
    )
