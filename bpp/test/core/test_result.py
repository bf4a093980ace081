"""Tests for bpp.core.result module."""

from __future__ import annotations

import pytest

from bpp.core.errors import ErrorCode
from bpp.core.result import Err, Ok, is_err, is_ok


def test_ok_unwrap() -> None:
    result = Ok(42)
    assert result.is_ok()
    assert not result.is_err()
    assert result.unwrap() == 42
    assert is_ok(result)
    assert repr(result) == "Ok(42)"


def test_err_unwrap_raises() -> None:
    result = Err("boom")
    assert result.is_err()
    assert is_err(result)
    with pytest.raises(ValueError, match="boom"):
        result.unwrap()


def test_match_on_result() -> None:
    match Err("no artifact"):
        case Ok(value):
            pytest.fail(f"unexpected {value}")
        case Err(error):
            assert error == "no artifact"


def test_error_codes_are_stable() -> None:
    assert int(ErrorCode.OK) == 0
    assert int(ErrorCode.USER_ERROR) == 1
    assert int(ErrorCode.NETWORK_ERROR) == 4
    assert str(ErrorCode.NETWORK_ERROR) == "network error"
    assert [code.name for code in ErrorCode] == ["OK", "USER_ERROR", "NETWORK_ERROR"]
    assert ErrorCode.OK.is_success
