"""Value Objects shared across the domain.

Prices and totals are ``Money``; ordered quantities are ``Quantity``.
Both validate on construction, so an OrderDetail or Product can never
hold a negative price or a zero-unit line.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from procure.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative amount in the store's single currency, kept to cents.

    Stored prices are decimal(10,2), so ``of()`` rounds half-up to the
    cent on the way in; sums and quantity multiples stay exact.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Parse user or wire input such as ``"15.00"`` into cents."""
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if value.is_finite():
            value = value.quantize(CENT, rounding=ROUND_HALF_UP)
        return Money(value)

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    @staticmethod
    def total(parts) -> Money:
        """Sum an iterable of Money, zero when empty."""
        result = Money.zero()
        for part in parts:
            result = result + part
        return result

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, units: int) -> Money:
        if isinstance(units, bool) or not isinstance(units, int):
            raise TypeError(f"Money can only be multiplied by a unit count, got {units!r}")
        return Money(self.amount * units)

    def __str__(self) -> str:
        return str(self.amount.quantize(CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Quantity:
    """Units ordered on a purchase order line; always a positive int."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
