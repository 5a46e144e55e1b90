"""Application service: purchase order queries and order alerts."""

from __future__ import annotations

from datetime import date, timedelta

from procure.application.dto import OrderDTO
from procure.application.mapping import load_order_dto
from procure.domain.exceptions import EntityKind, EntityNotFoundError, ValidationError
from procure.domain.model.purchase_order import OrderStatus, PurchaseOrder
from procure.domain.repository.unit_of_work import UnitOfWork

AWAITING_DELIVERY = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(EntityKind.ORDER, order_id)
            return load_order_dto(uow, order)

    def by_number(self, order_number: str) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_number(order_number)
            if order is None:
                raise EntityNotFoundError(EntityKind.ORDER, order_number)
            return load_order_dto(uow, order)

    def list_orders(self, status: str | None = None) -> list[OrderDTO]:
        with self._uow as uow:
            if status is None:
                orders = uow.orders.list_all()
            else:
                try:
                    orders = uow.orders.list_by_status(OrderStatus(status.upper()))
                except ValueError:
                    raise ValidationError(f"Unknown order status: '{status}'")
            return [load_order_dto(uow, o) for o in orders]


class OrderAlertsHandler:
    """Orders that need chasing with the supplier."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def overdue(self, today: date | None = None) -> list[OrderDTO]:
        today = today or date.today()
        return self._matching(lambda o: o.is_overdue(today), today)

    def due_within(self, days: int, today: date | None = None) -> list[OrderDTO]:
        """PENDING or CONFIRMED orders expected between *today* and *today + days*.

        Orders already PARTIAL have started arriving and are left to
        ``overdue()``.
        """
        if days < 0:
            raise ValidationError("Days ahead cannot be negative")
        today = today or date.today()
        horizon = today + timedelta(days=days)

        def due(order: PurchaseOrder) -> bool:
            return (
                order.expected_date is not None
                and today <= order.expected_date <= horizon
                and order.status in AWAITING_DELIVERY
            )

        return self._matching(due, today)

    def _matching(self, predicate, today: date) -> list[OrderDTO]:
        with self._uow as uow:
            return [
                load_order_dto(uow, o, today)
                for o in uow.orders.list_all()
                if predicate(o)
            ]
