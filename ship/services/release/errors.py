from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class FileAccessFailed:
    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class ManifestFieldMissing:
    key: str
    path: Path


@dataclass(frozen=True, slots=True)
class InvalidVersion:
    value: str


@dataclass(frozen=True, slots=True)
class InvalidBumpKind:
    value: str


@dataclass(frozen=True, slots=True)
class NoVersionControlRoot:
    path: Path


@dataclass(frozen=True, slots=True)
class SubprocessFailure:
    tool: str
    returncode: int
    command: tuple[str, ...] = ()
    detail: str = ""


@dataclass(frozen=True, slots=True)
class ArtifactsMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class ConfigInvalid:
    reason: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class UserDeclined:
    """The user answered "no" to a continuation prompt. Not a failure."""

    reason: str = "Deployment cancelled."


ReleaseError = (
    FileAccessFailed
    | ManifestFieldMissing
    | InvalidVersion
    | InvalidBumpKind
    | NoVersionControlRoot
    | SubprocessFailure
    | ArtifactsMissing
    | ConfigInvalid
    | UserDeclined
)
