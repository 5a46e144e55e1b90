"""PurchaseOrder aggregate — an order placed with one supplier.

The order owns its lines through their ``order_id``; it keeps only the
derived ``total_amount`` and the lifecycle fields. Status changes are
driven by OrderLifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Iterable

from procure.domain.exceptions import ValidationError
from procure.domain.model.order_detail import OrderDetail
from procure.domain.model.value_objects import Money

MAX_ORDER_NUMBER_LENGTH = 50
MAX_NOTES_LENGTH = 1000


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PARTIAL = "PARTIAL"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


@dataclass
class PurchaseOrder:
    """Aggregate root for purchase orders.

    Use ``PurchaseOrder.create()`` for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: int | None
    order_number: str
    supplier_id: int
    order_date: date
    status: OrderStatus = OrderStatus.PENDING
    expected_date: date | None = None
    received_date: date | None = None
    total_amount: Money = field(default_factory=Money.zero)
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        supplier_id: int,
        order_date: date,
        expected_date: date | None = None,
        notes: str | None = None,
        created_by: str | None = None,
    ) -> PurchaseOrder:
        if not order_number or not order_number.strip():
            raise ValidationError("Order number is required")
        if len(order_number.strip()) > MAX_ORDER_NUMBER_LENGTH:
            raise ValidationError(
                f"Order number must be at most {MAX_ORDER_NUMBER_LENGTH} characters"
            )
        if expected_date is not None and expected_date < order_date:
            raise ValidationError("Expected date cannot be before the order date")
        if notes is not None and len(notes) > MAX_NOTES_LENGTH:
            raise ValidationError(f"Notes must be at most {MAX_NOTES_LENGTH} characters")

        return PurchaseOrder(
            id=None,
            order_number=order_number.strip(),
            supplier_id=supplier_id,
            order_date=order_date,
            expected_date=expected_date,
            notes=notes,
            created_by=created_by,
        )

    # --- Derived state --------------------------------------------------------

    def recalculate_total(self, lines: Iterable[OrderDetail]) -> None:
        self.total_amount = Money.total(line.total_price for line in lines)

    def is_overdue(self, today: date | None = None) -> bool:
        today = today or date.today()
        return (
            self.expected_date is not None
            and today > self.expected_date
            and not self.status.is_terminal
        )

    def append_notes(self, text: str) -> None:
        if not text or not text.strip():
            return
        self.notes = text if not self.notes else f"{self.notes}\n{text}"
