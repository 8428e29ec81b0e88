"""Tests for lenient value coercion helpers."""

import math

import pytest

from utils.coercion import coerce_bool, coerce_int, coerce_price, coerce_text, first_defined


class TestCoercePrice:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (199.99, 199.99),
            (1000, 1000.0),
            ("199.99", 199.99),
            (" 1,234.50 ", 1234.5),
            ("₱18,995.00", 18995.0),
            ("$42", 42.0),
            ("PHP 3,950.50", 3950.5),
        ],
    )
    def test_numeric_values(self, value, expected):
        assert coerce_price(value) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "value", [None, "", "free", "12abc", -5, "-1", True, math.nan, math.inf, [], {}]
    )
    def test_unusable_values_become_zero(self, value):
        assert coerce_price(value) == 0.0


class TestCoerceInt:
    @pytest.mark.parametrize(
        ("value", "expected"), [(7, 7), ("12", 12), (" 3 ", 3), (4.0, 4), ("5.0", 5)]
    )
    def test_integral_values(self, value, expected):
        assert coerce_int(value) == expected

    @pytest.mark.parametrize("value", [None, "abc", 4.5, "4.5", True, math.nan, object()])
    def test_non_integral_values_use_default(self, value):
        assert coerce_int(value) == 0
        assert coerce_int(value, default=-1) == -1


def test_coerce_text():
    assert coerce_text("Ryzen") == "Ryzen"
    assert coerce_text(5600) == "5600"
    assert coerce_text(None) == ""
    assert coerce_text(False, default="x") == "x"
    assert coerce_text(["a"]) == ""


def test_coerce_bool():
    assert coerce_bool(True) is True
    assert coerce_bool("yes") is True
    assert coerce_bool(" TRUE ") is True
    assert coerce_bool("false") is False
    assert coerce_bool(0) is False


def test_first_defined_skips_missing_and_none():
    raw = {"Title": None, "name": "Ryzen", "title": "ignored"}
    assert first_defined(raw, ("Title", "name")) == "Ryzen"
    assert first_defined(raw, ("Image", "image")) is None
    assert first_defined({"Price": 0, "price": 9}, ("Price", "price")) == 0


def test_price_out_of_float_range_is_zero():
    assert coerce_price(10**400) == 0.0
    assert coerce_price("1" * 400) == 0.0
