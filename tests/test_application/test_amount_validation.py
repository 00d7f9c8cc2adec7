"""Tests for amount input normalization"""
import pytest

from periodic_calendar.utils.validation import validate_and_normalize_amount, validate_decimal_amount


def test_comma_becomes_dot():
    assert validate_and_normalize_amount("100,50") == "100.50"


def test_blank_means_no_amount():
    assert validate_and_normalize_amount(None) is None
    assert validate_and_normalize_amount("  ") is None


@pytest.mark.parametrize("raw", ["abc", "1.234", "NaN"])
def test_rejects(raw):
    with pytest.raises(ValueError):
        validate_and_normalize_amount(raw)


def test_reports_error_message():
    assert validate_decimal_amount("1.234") == (False, "At most 2 decimal places")
    assert validate_decimal_amount("-5") == (True, None)
