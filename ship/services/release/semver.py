from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from ship.core.result import Err, Ok, Result
from ship.services.release.errors import InvalidBumpKind, InvalidVersion


_VERSION_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


class BumpKind(StrEnum):
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    NONE = "none"


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        return f"v{self}"

    def bump(self, kind: BumpKind) -> SemVer:
        match kind:
            case BumpKind.MAJOR:
                return SemVer(self.major + 1, 0, 0)
            case BumpKind.MINOR:
                return SemVer(self.major, self.minor + 1, 0)
            case BumpKind.PATCH:
                return SemVer(self.major, self.minor, self.patch + 1)
            case BumpKind.NONE:
                return self
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> Result[SemVer, InvalidVersion]:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return Err(InvalidVersion(value=text))
    return Ok(SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3))))


def parse_bump_kind(text: str) -> Result[BumpKind, InvalidBumpKind]:
    try:
        return Ok(BumpKind(text.strip().lower()))
    except ValueError:
        return Err(InvalidBumpKind(value=text))


def next_version(current: SemVer, kind: BumpKind | str) -> Result[SemVer, InvalidBumpKind]:
    """Bump `current`, rejecting unknown kinds instead of defaulting."""
    parsed = parse_bump_kind(str(kind))
    if isinstance(parsed, Err):
        return parsed
    return Ok(current.bump(parsed.value))


def preview_bumps(current: SemVer) -> dict[BumpKind, SemVer]:
    """Candidate versions shown in the interactive bump menu."""
    return {kind: current.bump(kind) for kind in (BumpKind.PATCH, BumpKind.MINOR, BumpKind.MAJOR)}
