import pytest

from osas_connect.libs.result import Error, Return


def test_ok_result():
    result = Return.ok(42)

    assert result.is_ok()
    assert not result.is_err()
    assert result.value == 42
    with pytest.raises(AttributeError):
        result.error


def test_err_result():
    result = Return.err(Error("FORBIDDEN", "nope"))

    assert result.is_err()
    assert result.error.code == "FORBIDDEN"
    assert result.error.reason is None
    with pytest.raises(AttributeError):
        result.value


def test_ok_without_value():
    assert Return.ok().value is None
