# src/common_service/tests/test_utils/test_string_utils.py
import pytest

from common_service.utils.string import (
    atoi,
    is_empty_or_null,
    is_not_empty_or_null,
    itoa,
    null_string_to_string,
    string_to_null_string,
)


@pytest.mark.parametrize("value", [None, "", "   ", "null", "NULL", "Null"])
def test_empty_or_null_values(value):
    assert is_empty_or_null(value) is True
    assert is_not_empty_or_null(value) is False


@pytest.mark.parametrize("value", ["a", " x ", "nullable", "0"])
def test_non_empty_values(value):
    assert is_empty_or_null(value) is False
    assert is_not_empty_or_null(value) is True


def test_null_string_conversions():
    assert null_string_to_string(None) == ""
    assert null_string_to_string("abc") == "abc"
    assert string_to_null_string("") == ""


@pytest.mark.parametrize("number,expected", [(0, "0"), (42, "42"), (-7, "-7"), (3.9, "3"), (-3.9, "-3")])
def test_itoa(number, expected):
    assert itoa(number) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("42", 42),
        ("-5", -5),
        ("+7", 7),
        ("9223372036854775807", 9223372036854775807),
        ("9223372036854775808", 0),
        (" 12", 0),
        ("1_000", 0),
        ("", 0),
        ("4.2", 0),
        ("abc", 0),
        (None, 0),
    ],
)
def test_atoi(value, expected):
    assert atoi(value) == expected


@pytest.mark.parametrize("number", [float("nan"), float("inf"), float("-inf")])
def test_itoa_rejects_non_finite(number):
    with pytest.raises(ValueError):
        itoa(number)
