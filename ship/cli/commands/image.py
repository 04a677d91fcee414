from __future__ import annotations

import typer

from ship.cli.commands._helpers import reject_extra_args, unwrap_or_exit
from ship.cli.context import build_context
from ship.services.image import ImageBuilder


def image(ctx: typer.Context) -> None:
    """Build the container image for all platforms and push `latest` + version tags."""
    reject_extra_args(ctx.args)
    cli = build_context()

    version = unwrap_or_exit(cli.manifest.read_field("version"), cli.console)
    builder = ImageBuilder(root=cli.root, config=cli.config.image, console=cli.console)
    unwrap_or_exit(builder.publish(version), cli.console)
