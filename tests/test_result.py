"""Tests for dal.result."""

import pytest

from dal.errors import ConversionError
from dal.result import Err, Ok, try_result


class TestOk:
    def test_create_ok(self):
        result = Ok(42)
        assert result.value == 42
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_unwrap_variants(self):
        result = Ok("hello")
        assert result.unwrap() == "hello"
        assert result.unwrap_or("x") == "hello"
        assert result.unwrap_or_else(lambda e: "x") == "hello"

    def test_map(self):
        assert Ok(3).map(lambda x: x * 2).map(lambda x: x + 1).unwrap() == 7

    def test_to_dict(self):
        assert Ok(1).to_dict() == {"ok": True, "value": 1}

    def test_pattern_matching(self):
        match Ok(5):
            case Ok(value):
                assert value == 5
            case _:
                pytest.fail("expected Ok")


class TestErr:
    def test_create_err(self):
        result = Err(ValueError("bad"))
        assert result.is_ok() is False
        assert result.is_err() is True

    def test_unwrap_raises(self):
        error = ConversionError("abc", int)
        with pytest.raises(ConversionError):
            Err(error).unwrap()

    def test_unwrap_or(self):
        assert Err(ValueError("bad")).unwrap_or(0) == 0

    def test_unwrap_or_else_gets_error(self):
        assert Err(ValueError("bad")).unwrap_or_else(lambda e: str(e)) == "bad"

    def test_map_is_noop(self):
        error = ValueError("bad")
        result = Err(error).map(lambda x: x * 2)
        assert result.is_err()
        assert result.error is error

    def test_to_dict(self):
        assert Err(ValueError("bad")).to_dict() == {"ok": False, "error": "bad", "error_type": "ValueError"}


class TestTryResult:
    def test_success(self):
        assert try_result(lambda: int("42")) == Ok(42)

    def test_failure(self):
        result = try_result(lambda: int("x"))
        assert isinstance(result.error, ValueError)

    def test_unlisted_errors_propagate(self):
        with pytest.raises(KeyError):
            try_result(lambda: {}["missing"], errors=(ValueError,))
