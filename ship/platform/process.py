"""Subprocess execution for release collaborators.

git, the package builder, the uploader and docker all go through these two
functions. Neither raises for a failing command: the caller gets
`Err(ProcessError)` and decides whether the run stops.

    match run(["git", "rev-parse", "--git-dir"], cwd=root):
        case Ok(stdout):
            ...
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from ship.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out or could not start.

    `returncode` is -1 when the process never produced an exit status.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def tool(self) -> str:
        """Name of the executable, e.g. "git" or "docker"."""
        return self.command[0] if self.command else ""

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run a command capturing its output; return stdout on exit 0."""
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[None, ProcessError]:
    """Run a command with output streaming straight to the terminal.

    Used for long-running steps (build, upload, image push) where the user
    should see progress. Only the exit status is captured.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
