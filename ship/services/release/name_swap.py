"""Publish under a different package name, then put the original back.

The development name in pyproject.toml can collide with an existing project
on the index, so uploads go out under a separate publish name. The swap is
scoped: whatever happens inside the body (an `Err`, an exception, Ctrl-C or a
SIGTERM from the CI runner) the manifest leaves the scope with its original
name.
"""

from __future__ import annotations

import signal
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from types import FrameType
from typing import TypeVar

from ship.core.result import Err, Ok, Result
from ship.output.console import ConsoleProtocol
from ship.services.release.errors import ReleaseError
from ship.services.release.manifest import Manifest

T = TypeVar("T")

_TERMINATION_SIGNALS = tuple(
    sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if sig
)


@dataclass(slots=True)
class NameSwapState:
    original_name: str
    active: bool = False

    def restore(self, manifest: Manifest, console: ConsoleProtocol) -> Result[None, ReleaseError]:
        """Write the original name back; a no-op once restored."""
        if not self.active:
            return Ok(None)

        console.info(f"Restoring project name to {self.original_name}")
        written = manifest.write_field("name", self.original_name)
        if isinstance(written, Err):
            return written
        self.active = False
        return Ok(None)


@contextmanager
def _termination_as_exit() -> Iterator[None]:
    """Turn SIGTERM/SIGHUP into SystemExit so `finally` blocks still run.

    Signal handlers can only be installed from the main thread; elsewhere the
    scope is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _raise(signum: int, _frame: FrameType | None) -> None:
        raise SystemExit(128 + signum)

    previous = {sig: signal.signal(sig, _raise) for sig in _TERMINATION_SIGNALS}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def with_temporary_name(
    manifest: Manifest,
    temp_name: str,
    body: Callable[[], Result[T, ReleaseError]],
    *,
    console: ConsoleProtocol,
) -> Result[T, ReleaseError]:
    original = manifest.read_field("name")
    if isinstance(original, Err):
        return original

    if original.value == temp_name:
        return body()

    state = NameSwapState(original_name=original.value)
    try:
        with _termination_as_exit():
            console.info(f"Temporarily setting project name to {temp_name} for distribution")
            # Active before the write: an interrupt mid-write still restores.
            state.active = True
            written = manifest.write_field("name", temp_name)
            if isinstance(written, Err):
                state.active = False
                return written
            result = body()
    except BaseException:
        restored = state.restore(manifest, console)
        if isinstance(restored, Err):
            console.error(f"failed to restore project name to {state.original_name}")
        raise

    restored = state.restore(manifest, console)
    if isinstance(restored, Err):
        return restored
    return result
