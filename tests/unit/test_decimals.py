"""Tests for pm_common.decimals."""
from decimal import Decimal

import pytest

from src.pm_common.decimals import parse_decimal, price_key, validate_positive_decimal


class TestParseDecimal:
    def test_plain_integer_string(self) -> None:
        assert parse_decimal("50000") == Decimal("50000")

    def test_preserves_scale(self) -> None:
        assert str(parse_decimal("100.50")) == "100.50"

    def test_daml_ten_digit_scale(self) -> None:
        assert parse_decimal("0.0000000001") == Decimal("1E-10")

    def test_negative_allowed(self) -> None:
        assert parse_decimal("-2.5") == Decimal("-2.5")

    @pytest.mark.parametrize("bad", [
        "", "abc", " 1", "1 ", "NaN", "Infinity", "-inf",
        "1_000", "1e5", "+5", "١٢", ".5", "5.", "0.00000000001",
    ])
    def test_rejects_non_decimal(self, bad: str) -> None:
        with pytest.raises(ValueError):
            parse_decimal(bad)


class TestValidatePositiveDecimal:
    def test_returns_original_string(self) -> None:
        assert validate_positive_decimal("0.10") == "0.10"

    def test_zero_rejected(self) -> None:
        with pytest.raises(ValueError):
            validate_positive_decimal("0")

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            validate_positive_decimal("-5")


class TestPriceKey:
    def test_numeric_not_lexicographic(self) -> None:
        # "100.50" < "99.9" as strings
        assert "100.50" < "99.9"
        assert price_key("100.50") > price_key("99.9")

    def test_sorting_mixed_scales(self) -> None:
        prices = ["99.9", "100.50", "100.5", "9", "1000"]
        assert sorted(prices, key=price_key) == ["9", "99.9", "100.50", "100.5", "1000"]
