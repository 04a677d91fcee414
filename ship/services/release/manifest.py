"""Line-level access to `key = "value"` fields in pyproject.toml.

Only the first line matching a key counts, the same way a `grep '^name = '`
would see it. Writes replace the quoted value and nothing else, so comments,
ordering and line endings survive a version bump untouched.
"""

from __future__ import annotations

import re
from pathlib import Path

from ship.core.result import Err, Ok, Result
from ship.platform.files import atomic_write_text, read_text_exact
from ship.services.release.errors import (
    FileAccessFailed,
    ManifestFieldMissing,
    ReleaseError,
)
from ship.services.release.semver import SemVer, parse_version

MANIFEST_FILENAME = "pyproject.toml"


def _field_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf'(?m)^({re.escape(key)}\s*=\s*")([^"\r\n]*)(")')


class Manifest:
    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def in_project(cls, root: Path) -> Manifest:
        return cls(root / MANIFEST_FILENAME)

    def read_field(self, key: str) -> Result[str, ReleaseError]:
        text = self._read()
        if isinstance(text, Err):
            return text

        m = _field_pattern(key).search(text.value)
        if m is None:
            return Err(ManifestFieldMissing(key=key, path=self.path))
        return Ok(m.group(2))

    def write_field(self, key: str, value: str) -> Result[bool, ReleaseError]:
        """Set the first `key = "..."` line to `value`.

        Returns Ok(False) without touching the file when it already holds
        `value`, Ok(True) after rewriting it.
        """
        text = self._read()
        if isinstance(text, Err):
            return text

        pattern = _field_pattern(key)
        m = pattern.search(text.value)
        if m is None:
            return Err(ManifestFieldMissing(key=key, path=self.path))
        if m.group(2) == value:
            return Ok(False)

        updated = text.value[: m.start(2)] + value + text.value[m.end(2) :]
        try:
            atomic_write_text(self.path, updated)
        except OSError as e:
            return Err(FileAccessFailed(path=self.path, reason=str(e)))
        return Ok(True)

    def read_version(self) -> Result[SemVer, ReleaseError]:
        raw = self.read_field("version")
        if isinstance(raw, Err):
            return raw
        return parse_version(raw.value)

    def _read(self) -> Result[str, ReleaseError]:
        try:
            return Ok(read_text_exact(self.path))
        except FileNotFoundError:
            return Err(FileAccessFailed(path=self.path, reason="file not found"))
        except (OSError, UnicodeDecodeError) as e:
            return Err(FileAccessFailed(path=self.path, reason=str(e)))
