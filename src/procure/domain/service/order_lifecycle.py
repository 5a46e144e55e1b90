"""Domain service: Order Lifecycle.

State machine over ``PurchaseOrder.status``:
PENDING -> CONFIRMED -> PARTIAL -> COMPLETED, with CANCELLED reachable
from every non-terminal state.

COMPLETED and CANCELLED are terminal. After a receiving batch the new
status is a pure function of the order's line states; manual moves go
through ``transition()`` and the table below.
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

from procure.domain.exceptions import (
    InvalidOrderOperationError,
    OrderStateConflictError,
)
from procure.domain.model.order_detail import OrderDetail
from procure.domain.model.purchase_order import OrderStatus, PurchaseOrder

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset(
        {OrderStatus.PARTIAL, OrderStatus.COMPLETED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PARTIAL: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class OrderLifecycle:

    @staticmethod
    def ensure_receivable(order: PurchaseOrder) -> None:
        if order.status.is_terminal:
            raise OrderStateConflictError(
                order.id,
                f"Cannot receive order {order.order_number}: "
                f"order is {order.status.value}",
            )

    @staticmethod
    def status_after_receipt(
        current: OrderStatus, lines: Sequence[OrderDetail]
    ) -> OrderStatus:
        """The status an order should have given its line states."""
        if lines and all(line.is_fully_received for line in lines):
            return OrderStatus.COMPLETED
        if any(line.quantity_received > 0 for line in lines):
            return OrderStatus.PARTIAL
        return current

    @staticmethod
    def apply_receipt(
        order: PurchaseOrder,
        lines: Sequence[OrderDetail],
        received_date: date,
    ) -> None:
        """Re-evaluate *order* once after a receiving batch.

        Completion stamps the batch date; a partial receipt stamps it
        only if no receipt date has been recorded yet.
        """
        OrderLifecycle.ensure_receivable(order)
        new_status = OrderLifecycle.status_after_receipt(order.status, lines)

        if new_status == OrderStatus.COMPLETED:
            order.received_date = received_date
        elif new_status == OrderStatus.PARTIAL and order.received_date is None:
            order.received_date = received_date
        order.status = new_status

    @staticmethod
    def transition(
        order: PurchaseOrder,
        new_status: OrderStatus,
        notes: str | None = None,
        today: date | None = None,
    ) -> None:
        """Move *order* to *new_status* by hand (confirm, cancel, close)."""
        if order.status.is_terminal:
            raise OrderStateConflictError(
                order.id,
                f"Order {order.order_number} is {order.status.value} "
                f"and cannot change status",
            )
        if new_status not in ALLOWED_TRANSITIONS[order.status]:
            raise InvalidOrderOperationError(
                f"Invalid status transition from {order.status.value} "
                f"to {new_status.value}"
            )

        order.status = new_status
        if new_status == OrderStatus.COMPLETED and order.received_date is None:
            order.received_date = today or date.today()
        if notes:
            order.append_notes(notes)
