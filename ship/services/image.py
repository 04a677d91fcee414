"""Multi-platform container image build and push via `docker buildx`.

The image is tagged twice, `latest` and the manifest version, and pushed to
the repository named in `[tool.ship.image]`.
"""

from __future__ import annotations

from pathlib import Path

from ship.core.config import ImageConfig
from ship.core.result import Err, Ok, Result
from ship.output.console import ConsoleProtocol
from ship.platform.process import ProcessError, run, run_silent
from ship.services.release.errors import ConfigInvalid, ReleaseError, SubprocessFailure


def _docker_failure(e: ProcessError) -> SubprocessFailure:
    return SubprocessFailure(
        tool="docker",
        returncode=e.returncode,
        command=e.command,
        detail=e.stderr.strip(),
    )


def image_tags(repository: str, version: str) -> list[str]:
    return [f"{repository}:latest", f"{repository}:{version}"]


def buildx_build_command(config: ImageConfig, repository: str, version: str) -> list[str]:
    cmd = [
        "docker",
        "buildx",
        "build",
        "-f",
        config.dockerfile,
        "--platform",
        ",".join(config.platforms),
    ]
    for tag in image_tags(repository, version):
        cmd.extend(["--tag", tag])
    cmd.extend([config.context, "--push"])
    return cmd


class ImageBuilder:
    def __init__(self, *, root: Path, config: ImageConfig, console: ConsoleProtocol) -> None:
        self._root = root
        self._config = config
        self._console = console

    def ensure_builder(self) -> Result[None, ReleaseError]:
        """Select the configured buildx builder, creating it on first use."""
        name = self._config.builder
        inspected = run(["docker", "buildx", "inspect", name], cwd=self._root)
        if isinstance(inspected, Ok):
            cmd = ["docker", "buildx", "use", name]
        else:
            cmd = [
                "docker",
                "buildx",
                "create",
                "--use",
                "--name",
                name,
                "--node",
                f"{name}0",
                "--driver",
                "docker-container",
                "--driver-opt",
                f"image={self._config.buildkit_image}",
            ]

        self._console.command(cmd)
        result = run(cmd, cwd=self._root).map_err(_docker_failure)
        if isinstance(result, Err):
            return result
        return Ok(None)

    def publish(self, version: str) -> Result[list[str], ReleaseError]:
        """Build for every configured platform and push both tags."""
        repository = self._config.repository
        if repository is None:
            return Err(ConfigInvalid(reason="[tool.ship.image] repository is not set"))

        ready = self.ensure_builder()
        if isinstance(ready, Err):
            return ready

        cmd = buildx_build_command(self._config, repository, version)
        self._console.info(f"Building {repository} for {', '.join(self._config.platforms)}")
        self._console.command(cmd)
        built = run_silent(cmd, cwd=self._root).map_err(_docker_failure)
        if isinstance(built, Err):
            return built

        tags = image_tags(repository, version)
        for tag in tags:
            self._console.success(f"Pushed {tag}")
        return Ok(tags)
