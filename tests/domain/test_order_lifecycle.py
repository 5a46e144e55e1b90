"""Unit tests for the OrderLifecycle state machine."""

from datetime import date

import pytest

from procure.domain.exceptions import (
    ErrorKind,
    InvalidOrderOperationError,
    OrderStateConflictError,
)
from procure.domain.model.order_detail import OrderDetail
from procure.domain.model.purchase_order import OrderStatus, PurchaseOrder
from procure.domain.model.value_objects import Money, Quantity
from procure.domain.service.order_lifecycle import OrderLifecycle

BATCH_DATE = date(2026, 4, 2)


def _order(status: OrderStatus = OrderStatus.CONFIRMED) -> PurchaseOrder:
    order = PurchaseOrder.create("PO-7", 1, date(2026, 4, 1))
    order.id = 7
    order.status = status
    return order


def _line(ordered: int, received: int) -> OrderDetail:
    return OrderDetail(None, 7, 1, Quantity(ordered), Money.of("1.00"), received)


# ── After a receiving batch ──────────────────────────────────────────────────


class TestApplyReceipt:

    def test_all_lines_full_completes_and_stamps_date(self):
        order = _order()
        OrderLifecycle.apply_receipt(order, [_line(5, 5), _line(3, 3)], BATCH_DATE)
        assert order.status == OrderStatus.COMPLETED
        assert order.received_date == BATCH_DATE

    def test_some_received_goes_partial(self):
        order = _order()
        OrderLifecycle.apply_receipt(order, [_line(5, 5), _line(3, 1)], BATCH_DATE)
        assert order.status == OrderStatus.PARTIAL
        assert order.received_date == BATCH_DATE

    def test_partial_keeps_first_receipt_date(self):
        order = _order(OrderStatus.PARTIAL)
        order.received_date = date(2026, 4, 1)
        OrderLifecycle.apply_receipt(order, [_line(5, 4)], BATCH_DATE)
        assert order.received_date == date(2026, 4, 1)

    def test_completion_overwrites_partial_date(self):
        order = _order(OrderStatus.PARTIAL)
        order.received_date = date(2026, 4, 1)
        OrderLifecycle.apply_receipt(order, [_line(5, 5)], BATCH_DATE)
        assert order.received_date == BATCH_DATE

    def test_nothing_received_leaves_status(self):
        order = _order(OrderStatus.PENDING)
        OrderLifecycle.apply_receipt(order, [_line(5, 0)], BATCH_DATE)
        assert order.status == OrderStatus.PENDING
        assert order.received_date is None

    def test_order_without_lines_is_unchanged(self):
        order = _order()
        OrderLifecycle.apply_receipt(order, [], BATCH_DATE)
        assert order.status == OrderStatus.CONFIRMED

    @pytest.mark.parametrize("status", [OrderStatus.COMPLETED, OrderStatus.CANCELLED])
    def test_terminal_order_conflicts(self, status):
        with pytest.raises(OrderStateConflictError) as info:
            OrderLifecycle.apply_receipt(_order(status), [_line(5, 5)], BATCH_DATE)
        assert info.value.kind == ErrorKind.ORDER_STATE_CONFLICT
        assert info.value.order_id == 7

    def test_status_is_a_function_of_line_states(self):
        lines = [_line(5, 2), _line(3, 3)]
        first, second = _order(OrderStatus.PENDING), _order(OrderStatus.CONFIRMED)
        OrderLifecycle.apply_receipt(first, lines, BATCH_DATE)
        OrderLifecycle.apply_receipt(second, lines, BATCH_DATE)
        assert first.status == second.status == OrderStatus.PARTIAL


# ── Manual transitions ───────────────────────────────────────────────────────


class TestTransition:

    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.PENDING, OrderStatus.CONFIRMED),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.CONFIRMED, OrderStatus.PARTIAL),
            (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
            (OrderStatus.PARTIAL, OrderStatus.COMPLETED),
        ],
    )
    def test_allowed(self, start, target):
        order = _order(start)
        OrderLifecycle.transition(order, target)
        assert order.status == target

    def test_pending_straight_to_completed_rejected(self):
        with pytest.raises(InvalidOrderOperationError, match="PENDING to COMPLETED"):
            OrderLifecycle.transition(_order(OrderStatus.PENDING), OrderStatus.COMPLETED)

    @pytest.mark.parametrize("status", [OrderStatus.COMPLETED, OrderStatus.CANCELLED])
    def test_leaving_terminal_state_conflicts(self, status):
        with pytest.raises(OrderStateConflictError, match="cannot change status"):
            OrderLifecycle.transition(_order(status), OrderStatus.CONFIRMED)

    def test_completing_stamps_received_date(self):
        order = _order()
        OrderLifecycle.transition(order, OrderStatus.COMPLETED, today=BATCH_DATE)
        assert order.received_date == BATCH_DATE

    def test_notes_are_appended(self):
        order = _order(OrderStatus.PENDING)
        order.notes = "Urgent"
        OrderLifecycle.transition(order, OrderStatus.CANCELLED, notes="Supplier out of stock")
        assert order.notes == "Urgent\nSupplier out of stock"
