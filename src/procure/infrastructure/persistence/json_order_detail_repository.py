"""JSON-backed implementation of OrderDetailRepository."""

from __future__ import annotations

from decimal import Decimal

from procure.domain.model.order_detail import OrderDetail
from procure.domain.model.value_objects import Money, Quantity
from procure.domain.repository.order_detail_repository import OrderDetailRepository
from procure.infrastructure.persistence.rows import next_id, upsert


class JsonOrderDetailRepository(OrderDetailRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    def get_by_id(self, detail_id: int) -> OrderDetail | None:
        for raw in self._rows:
            if raw["id"] == detail_id:
                return self._to_domain(raw)
        return None

    def list_by_order(self, order_id: int) -> list[OrderDetail]:
        return [
            self._to_domain(raw)
            for raw in sorted(self._rows, key=lambda r: r["id"])
            if raw["order_id"] == order_id
        ]

    def save(self, detail: OrderDetail) -> None:
        if detail.id is None:
            detail.id = next_id(self._rows)
        upsert(self._rows, self._to_raw(detail))

    @staticmethod
    def _to_raw(detail: OrderDetail) -> dict:
        return {
            "id": detail.id,
            "order_id": detail.order_id,
            "product_id": detail.product_id,
            "quantity_ordered": detail.quantity_ordered.value,
            "quantity_received": detail.quantity_received,
            "unit_price": str(detail.unit_price.amount),
        }

    @staticmethod
    def _to_domain(raw: dict) -> OrderDetail:
        return OrderDetail(
            id=raw["id"],
            order_id=raw["order_id"],
            product_id=raw["product_id"],
            quantity_ordered=Quantity(raw["quantity_ordered"]),
            quantity_received=raw["quantity_received"],
            unit_price=Money(Decimal(raw["unit_price"])),
        )
