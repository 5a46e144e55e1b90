"""OrderDetail — one product line of a purchase order.

A line refers to its order by id only; the order never holds live
references to its lines. Aggregates over an order's lines are computed
by querying the line repository for that order id.
"""

from __future__ import annotations

from dataclasses import dataclass

from procure.domain.exceptions import InvalidReceiptQuantityError, ValidationError
from procure.domain.model.value_objects import Money, Quantity


@dataclass
class OrderDetail:
    """Tracks how much of one ordered product has arrived.

    Invariant: ``0 <= quantity_received <= quantity_ordered``.
    ``receive()`` is the only mutation and it is not idempotent: calling
    it twice with the same quantity counts the goods twice.
    """

    id: int | None
    order_id: int
    product_id: int
    quantity_ordered: Quantity
    unit_price: Money  # agreed with the supplier, independent of catalog price
    quantity_received: int = 0

    def __post_init__(self) -> None:
        if not self.unit_price.is_positive:
            raise ValidationError("Line unit price must be greater than zero")
        if self.quantity_received < 0:
            raise ValidationError("Received quantity cannot be negative")
        if self.quantity_received > self.quantity_ordered.value:
            raise ValidationError("Received quantity cannot exceed ordered quantity")

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity_ordered.value

    @property
    def pending_quantity(self) -> int:
        return self.quantity_ordered.value - self.quantity_received

    @property
    def is_fully_received(self) -> bool:
        return self.quantity_received >= self.quantity_ordered.value

    @property
    def is_partially_received(self) -> bool:
        return 0 < self.quantity_received < self.quantity_ordered.value

    def check_receivable(self, quantity: int) -> None:
        """Raise InvalidReceiptQuantityError unless ``receive(quantity)`` would succeed."""
        if quantity <= 0:
            raise InvalidReceiptQuantityError(
                f"Receipt quantity must be positive, got {quantity}"
            )
        if self.quantity_received + quantity > self.quantity_ordered.value:
            raise InvalidReceiptQuantityError(
                f"Cannot receive {quantity} on line #{self.id} "
                f"(only {self.pending_quantity} pending)"
            )

    def receive(self, quantity: int) -> None:
        """Record that *quantity* units of this line have arrived."""
        self.check_receivable(quantity)
        self.quantity_received += quantity
