"""Git collaborator for release runs.

Wraps the handful of git commands a release needs: checking for a work tree,
detecting uncommitted changes, and committing/tagging/pushing a version bump.
All operations return Result types; nothing here retries.

Usage:
    repo = Repository(Path.cwd())
    if not repo.is_work_tree():
        ...
    match repo.tag("v1.2.3", "Release version 1.2.3"):
        case Ok(_):
            ...
        case Err(e):
            print(f"{e.command}: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ship.core.result import Err, Ok, Result
from ship.platform.process import ProcessError
from ship.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand line that failed (e.g. "push origin main")
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git work tree rooted at `path`."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def is_work_tree(self) -> bool:
        """True if `path` is inside a git repository."""
        return isinstance(self._run(["rev-parse", "--git-dir"]), Ok)

    def has_uncommitted_changes(self) -> Result[bool, GitError]:
        """Check tracked files against HEAD.

        Untracked files are ignored. Any non-zero exit from `git diff-index
        --quiet` counts as changes, including a repository with no HEAD yet,
        so the caller asks before releasing from it. Only a git that could not
        run at all is an error.
        """
        args = ["diff-index", "--quiet", "HEAD", "--"]
        result = self._run(args)
        match result:
            case Ok(_):
                return Ok(False)
            case Err(e) if e.returncode > 0:
                return Ok(True)
            case Err(e):
                return Err(self._error(args, e))

    def add(self, paths: Sequence[Path | str]) -> Result[None, GitError]:
        args = ["add", "--", *(str(p) for p in paths)]
        return self._checked(args)

    def commit(self, message: str) -> Result[None, GitError]:
        return self._checked(["commit", "-m", message])

    def tag(self, name: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag at HEAD."""
        return self._checked(["tag", "-a", name, "-m", message])

    def push(self, remote: str, branch: str, *, tags: bool = True) -> Result[None, GitError]:
        args = ["push", remote, branch]
        if tags:
            args.append("--tags")
        return self._checked(args)

    def _checked(self, args: list[str]) -> Result[None, GitError]:
        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error(args, result.error))
        return Ok(None)

    def _error(self, args: list[str], e: ProcessError) -> GitError:
        return GitError(
            command=" ".join(args),
            message=e.stderr.strip() or e.stdout.strip() or f"git {args[0]} failed",
            returncode=e.returncode,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if args[0] == "push" else _GIT_TIMEOUT_SECONDS
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
