from __future__ import annotations

from pathlib import Path

import pytest

from ship.core.errors import ErrorCode
from ship.output.console import MockConsole, Style
from ship.output.errors import print_release_error, release_error_exit_code
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

ALL_FAILURES: list[ReleaseError] = [
    FileAccessFailed(path=Path("pyproject.toml"), reason="file not found"),
    ManifestFieldMissing(key="version", path=Path("pyproject.toml")),
    InvalidVersion(value="1.2"),
    InvalidBumpKind(value="7"),
    NoVersionControlRoot(path=Path("/tmp/project")),
    SubprocessFailure(tool="twine", returncode=1, command=("python", "-m", "twine")),
    ArtifactsMissing(path=Path("dist")),
    ConfigInvalid(reason="[tool.ship.image] repository is not set"),
]


@pytest.mark.parametrize("error", ALL_FAILURES)
def test_failures_print_one_error_line_and_exit_1(error: ReleaseError) -> None:
    console = MockConsole()

    print_release_error(error, console)

    errors = [o for o in console.outputs if o.style == Style.ERROR]
    assert len(errors) == 1
    assert errors[0].message.startswith("error: ")
    assert release_error_exit_code(error) == int(ErrorCode.FAILURE)


def test_user_declined_is_info_and_exit_0() -> None:
    console = MockConsole()

    print_release_error(UserDeclined(), console)

    assert not console.has_error()
    assert console.messages == ["info: Deployment cancelled."]
    assert release_error_exit_code(UserDeclined()) == int(ErrorCode.OK)


def test_subprocess_failure_shows_command_and_detail() -> None:
    console = MockConsole()

    print_release_error(
        SubprocessFailure(
            tool="git",
            returncode=1,
            command=("git", "push", "origin", "main", "--tags"),
            detail="rejected",
        ),
        console,
    )

    assert console.messages == [
        "error: git failed (exit 1)",
        "$ git push origin main --tags",
        "rejected",
    ]
