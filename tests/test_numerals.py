"""Tests for Persian/Arabic-Indic digit normalization."""
import pytest

from siahrokh.services.numerals import normalize_numerals


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("۱۹۹۰", "1990"),
        ("۱۳۸۵", "1385"),
        ("١٩٩٠", "1990"),
        ("٢٠٠٥", "2005"),
        ("۱٩۹٠", "1990"),
        ("٢۰۰٠", "2000"),
        ("1990", "1990"),
        ("abc۱۲۳def", "abc123def"),
        ("test٤٥٦end", "test456end"),
    ],
)
def test_normalize(raw, expected):
    assert normalize_numerals(raw) == expected


def test_all_digits_positionally_preserved():
    persian = "۰۱۲۳۴۵۶۷۸۹"
    arabic = "٠١٢٣٤٥٦٧٨٩"
    assert normalize_numerals(persian) == "0123456789"
    assert normalize_numerals(arabic) == "0123456789"
    assert len(normalize_numerals(persian + arabic)) == 20


@pytest.mark.parametrize("value", [None, ""])
def test_empty_passes_through(value):
    assert normalize_numerals(value) is value


@pytest.mark.parametrize("value", ["۱۹۹۰", "٢۰۰٠x", "plain text", "۰۹-۱۲"])
def test_idempotent(value):
    once = normalize_numerals(value)
    assert normalize_numerals(once) == once
