from __future__ import annotations

import pytest

from ship.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


def test_ok_map_err_is_identity() -> None:
    ok: Ok[int] = Ok(1)
    assert ok.map_err(str.upper) is ok


def test_err_map_err_transforms() -> None:
    assert Err("boom").map_err(str.upper) == Err("BOOM")


def test_equality_and_repr() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    assert repr(Ok("x")) == "Ok('x')"
    assert repr(Err("x")) == "Err('x')"


def test_pattern_matching() -> None:
    match _half(10):
        case Ok(value):
            assert value == 5
        case Err(_):
            pytest.fail("expected Ok")

    match _half(3):
        case Ok(_):
            pytest.fail("expected Err")
        case Err(error):
            assert error == "3 is odd"
