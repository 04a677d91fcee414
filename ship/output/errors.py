"""Error presentation utilities.

One labelled `error:` line per failure, plus a dimmed hint where there is
something the user can do about it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ship.core.errors import ErrorCode
from ship.output.console import Style
from ship.services.release.errors import (
    ArtifactsMissing,
    ConfigInvalid,
    FileAccessFailed,
    InvalidBumpKind,
    InvalidVersion,
    ManifestFieldMissing,
    NoVersionControlRoot,
    ReleaseError,
    SubprocessFailure,
    UserDeclined,
)

if TYPE_CHECKING:
    from ship.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    match error:
        case UserDeclined(reason=reason):
            console.info(reason)
        case FileAccessFailed(path=path, reason=reason):
            console.error(f"cannot access {path}: {reason}")
        case ManifestFieldMissing(key=key, path=path):
            console.error(f'no `{key} = "..."` line in {path}')
        case InvalidVersion(value=value):
            console.error(f"invalid version: {value!r}")
            console.print("hint: expected MAJOR.MINOR.PATCH, e.g. 1.2.3", Style.DIM)
        case InvalidBumpKind(value=value):
            console.error(f"invalid version bump choice: {value!r}")
            console.print("hint: use --patch, --minor, --major or --no-bump", Style.DIM)
        case NoVersionControlRoot(path=path):
            console.error(f"not in a git repository: {path}")
            console.print("hint: run from the project root", Style.DIM)
        case SubprocessFailure(tool=tool, returncode=rc, command=command, detail=detail):
            console.error(f"{tool} failed (exit {rc})")
            if command:
                console.print(f"$ {' '.join(command)}", Style.DIM)
            if detail:
                console.print(detail, Style.DIM)
        case ArtifactsMissing(path=path):
            console.error(f"no build artifacts found in {path}")
        case ConfigInvalid(reason=reason, path=path):
            where = f" ({path})" if path is not None else ""
            console.error(f"invalid configuration{where}: {reason}")


def release_error_exit_code(error: ReleaseError) -> int:
    """Cancelling on purpose exits 0; every other error exits 1."""
    if isinstance(error, UserDeclined):
        return int(ErrorCode.OK)
    return int(ErrorCode.FAILURE)
