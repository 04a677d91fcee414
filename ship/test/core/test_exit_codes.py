from __future__ import annotations

from ship.core.errors import ErrorCode


def test_values_are_stable() -> None:
    assert int(ErrorCode.OK) == 0
    assert int(ErrorCode.FAILURE) == 1
