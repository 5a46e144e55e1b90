"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from procure.domain.exceptions import ValidationError
from procure.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_of_parses_wire_strings(self):
        assert Money.of(" 25.99 ").amount == Decimal("25.99")

    def test_of_rounds_half_up_to_cents(self):
        assert Money.of("1.005") == Money.of("1.01")
        assert str(Money.of("2.344")) == "2.34"

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money.of("NaN")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money.of("-0.50")

    def test_line_total(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_needs_a_unit_count(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5  # type: ignore[operator]
        with pytest.raises(TypeError):
            Money.of("7.50") * True

    def test_total_of_parts(self):
        assert Money.total([Money.of("10"), Money.of("5.50")]) == Money.of("15.50")
        assert Money.total([]) == Money.zero()

    def test_zero_is_not_positive(self):
        assert not Money.zero().is_positive
        assert Money.of("0.01").is_positive

    def test_str_always_shows_cents(self):
        assert str(Money.of(15)) == "15.00"
        assert str(Money(Decimal("9.5"))) == "9.50"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)
