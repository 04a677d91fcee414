from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ship.cli.commands._helpers import unwrap_or_exit
from ship.core.config import ConfigError, ShipConfig, load_config
from ship.output.console import ConsoleProtocol, RichConsole
from ship.services.release.errors import ConfigInvalid
from ship.services.release.manifest import Manifest
from ship.services.release.prompter import Prompter, TerminalPrompter

PROJECT_ROOT_ENV = "SHIP_PROJECT_ROOT"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    manifest: Manifest
    console: ConsoleProtocol
    prompter: Prompter
    config: ShipConfig = field(default_factory=ShipConfig)


def project_root() -> Path:
    env = os.environ.get(PROJECT_ROOT_ENV)
    if env:
        p = Path(env).expanduser().resolve()
        if p.is_dir():
            return p
    return Path.cwd().resolve()


def _config_invalid(e: ConfigError) -> ConfigInvalid:
    return ConfigInvalid(reason=e.message, path=e.path)


def build_context(*, with_config: bool = True) -> CLIContext:
    """Resolve the project and, unless told otherwise, its `[tool.ship]` table.

    A malformed table is reported like any other release error and exits 1.
    """
    root = project_root()
    manifest = Manifest.in_project(root)
    console = RichConsole()

    config = ShipConfig()
    if with_config:
        config = unwrap_or_exit(load_config(manifest.path).map_err(_config_invalid), console)

    return CLIContext(
        root=root,
        manifest=manifest,
        console=console,
        prompter=TerminalPrompter(),
        config=config,
    )
