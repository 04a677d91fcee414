from __future__ import annotations

import shutil
import sys
from pathlib import Path

from ship.core.config import Registry
from ship.core.result import Err, Ok, Result
from ship.output.console import ConsoleProtocol
from ship.platform.process import ProcessError, run_silent
from ship.services.release.errors import (
    ArtifactsMissing,
    FileAccessFailed,
    ReleaseError,
    SubprocessFailure,
)


def _failure(tool: str, e: ProcessError) -> SubprocessFailure:
    return SubprocessFailure(
        tool=tool,
        returncode=e.returncode,
        command=e.command,
        detail=e.stderr.strip(),
    )


class Publisher:
    """Build sdist + wheel with `build` and upload them with `twine`."""

    def __init__(
        self,
        *,
        root: Path,
        console: ConsoleProtocol,
        python: str | None = None,
    ) -> None:
        self._root = root
        self._console = console
        self._python = python or sys.executable

    @property
    def dist_dir(self) -> Path:
        return self._root / "dist"

    def clean(self) -> Result[list[Path], ReleaseError]:
        """Remove dist/, build/ and *.egg-info/ left by earlier builds."""
        targets = [self._root / "dist", self._root / "build"]
        targets.extend(sorted(self._root.glob("*.egg-info")))

        removed: list[Path] = []
        for target in targets:
            if not target.is_dir():
                continue
            try:
                shutil.rmtree(target)
            except OSError as e:
                return Err(FileAccessFailed(path=target, reason=str(e)))
            removed.append(target)
        return Ok(removed)

    def build(self) -> Result[list[Path], ReleaseError]:
        cmd = [self._python, "-m", "build"]
        self._console.command(cmd)
        built = run_silent(cmd, cwd=self._root).map_err(lambda e: _failure("build", e))
        if isinstance(built, Err):
            return built

        artifacts = sorted(p for p in self.dist_dir.glob("*") if p.is_file())
        if not artifacts:
            return Err(ArtifactsMissing(path=self.dist_dir))
        return Ok(artifacts)

    def upload(self, artifacts: list[Path], registry: Registry) -> Result[None, ReleaseError]:
        cmd = [self._python, "-m", "twine", "upload"]
        if registry.repository is not None:
            cmd.extend(["--repository", registry.repository])
        cmd.extend(str(p.relative_to(self._root)) for p in artifacts)

        self._console.info(f"Uploading to {registry.label}...")
        self._console.command(cmd)
        uploaded = run_silent(cmd, cwd=self._root).map_err(lambda e: _failure("twine", e))
        if isinstance(uploaded, Err):
            return uploaded

        self._console.success(f"Successfully uploaded to {registry.label}!")
        return Ok(None)

    def build_and_publish(self, registry: Registry) -> Result[list[Path], ReleaseError]:
        cleaned = self.clean()
        if isinstance(cleaned, Err):
            return cleaned

        built = self.build()
        if isinstance(built, Err):
            return built

        uploaded = self.upload(built.value, registry)
        if isinstance(uploaded, Err):
            return uploaded
        return Ok(built.value)
