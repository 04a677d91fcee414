from __future__ import annotations

import os
import signal
import sys
from pathlib import Path

import pytest

from ship.core.result import Err, Ok, Result
from ship.output.console import MockConsole
from ship.services.release.errors import FileAccessFailed, ReleaseError, SubprocessFailure
from ship.services.release.manifest import Manifest
from ship.services.release.name_swap import NameSwapState, with_temporary_name


@pytest.fixture
def manifest(tmp_path: Path) -> Manifest:
    path = tmp_path / "pyproject.toml"
    path.write_text('[project]\nname = "echo"\nversion = "0.1.0"\n', encoding="utf-8")
    return Manifest(path)


def _name(manifest: Manifest) -> str:
    result = manifest.read_field("name")
    assert isinstance(result, Ok)
    return result.value


def test_body_sees_temporary_name_and_original_is_restored(manifest: Manifest) -> None:
    seen: list[str] = []

    def body() -> Result[str, ReleaseError]:
        seen.append(_name(manifest))
        return Ok("published")

    result = with_temporary_name(manifest, "echo-app", body, console=MockConsole())

    assert result == Ok("published")
    assert seen == ["echo-app"]
    assert _name(manifest) == "echo"


def test_restores_after_failed_body(manifest: Manifest) -> None:
    failure = SubprocessFailure(tool="twine", returncode=1)

    result = with_temporary_name(manifest, "echo-app", lambda: Err(failure), console=MockConsole())

    assert result == Err(failure)
    assert _name(manifest) == "echo"


def test_restores_when_body_raises(manifest: Manifest) -> None:
    def body() -> Result[None, ReleaseError]:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        with_temporary_name(manifest, "echo-app", body, console=MockConsole())

    assert _name(manifest) == "echo"


def test_restores_on_keyboard_interrupt(manifest: Manifest) -> None:
    def body() -> Result[None, ReleaseError]:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        with_temporary_name(manifest, "echo-app", body, console=MockConsole())

    assert _name(manifest) == "echo"


def test_restores_on_interrupt_during_temporary_write(
    manifest: Manifest, monkeypatch: pytest.MonkeyPatch
) -> None:
    real_write = Manifest.write_field

    def write_then_interrupt(self: Manifest, key: str, value: str) -> Result[bool, ReleaseError]:
        written = real_write(self, key, value)
        if value == "echo-app":
            raise KeyboardInterrupt
        return written

    monkeypatch.setattr(Manifest, "write_field", write_then_interrupt)
    called: list[bool] = []

    def body() -> Result[None, ReleaseError]:
        called.append(True)
        return Ok(None)

    with pytest.raises(KeyboardInterrupt):
        with_temporary_name(manifest, "echo-app", body, console=MockConsole())

    assert called == []
    assert _name(manifest) == "echo"


def test_failed_temporary_write_skips_body(
    manifest: Manifest, monkeypatch: pytest.MonkeyPatch
) -> None:
    failure = FileAccessFailed(path=manifest.path, reason="read-only file system")

    def refuse(self: Manifest, key: str, value: str) -> Result[bool, ReleaseError]:
        return Err(failure)

    monkeypatch.setattr(Manifest, "write_field", refuse)
    console = MockConsole()

    result = with_temporary_name(manifest, "echo-app", lambda: Ok(1), console=console)

    assert result == Err(failure)
    assert console.find("Restoring") == []


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_restores_on_sigterm(manifest: Manifest) -> None:
    def body() -> Result[None, ReleaseError]:
        os.kill(os.getpid(), signal.SIGTERM)
        return Ok(None)

    previous = signal.getsignal(signal.SIGTERM)
    with pytest.raises(SystemExit) as exc:
        with_temporary_name(manifest, "echo-app", body, console=MockConsole())

    assert exc.value.code == 128 + signal.SIGTERM
    assert _name(manifest) == "echo"
    assert signal.getsignal(signal.SIGTERM) == previous


def test_skips_swap_when_name_already_matches(manifest: Manifest) -> None:
    console = MockConsole()
    before = manifest.path.read_bytes()

    result = with_temporary_name(manifest, "echo", lambda: Ok(1), console=console)

    assert result == Ok(1)
    assert manifest.path.read_bytes() == before
    assert console.find("Temporarily") == []
    assert console.find("Restoring") == []


def test_missing_name_fails_before_body(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    path.write_text('version = "0.1.0"\n', encoding="utf-8")
    called: list[bool] = []

    def body() -> Result[None, ReleaseError]:
        called.append(True)
        return Ok(None)

    result = with_temporary_name(Manifest(path), "echo-app", body, console=MockConsole())

    assert isinstance(result, Err)
    assert called == []


def test_restore_is_idempotent(manifest: Manifest) -> None:
    console = MockConsole()
    manifest.write_field("name", "echo-app")
    state = NameSwapState(original_name="echo", active=True)

    assert state.restore(manifest, console) == Ok(None)
    after_first = manifest.path.read_bytes()
    assert state.restore(manifest, console) == Ok(None)

    assert state.active is False
    assert manifest.path.read_bytes() == after_first
    assert _name(manifest) == "echo"
    assert len(console.find("Restoring project name")) == 1


def test_inactive_state_does_not_write(manifest: Manifest) -> None:
    before = manifest.path.read_bytes()

    NameSwapState(original_name="other").restore(manifest, MockConsole())

    assert manifest.path.read_bytes() == before
