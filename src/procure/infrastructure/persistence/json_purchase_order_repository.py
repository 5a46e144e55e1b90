"""JSON-backed implementation of PurchaseOrderRepository."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from procure.domain.model.purchase_order import OrderStatus, PurchaseOrder
from procure.domain.model.value_objects import Money
from procure.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)
from procure.infrastructure.persistence.rows import next_id, upsert


def _date_or_none(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


class JsonPurchaseOrderRepository(PurchaseOrderRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    # --- PurchaseOrderRepository interface ------------------------------------

    def get_by_id(self, order_id: int) -> PurchaseOrder | None:
        for raw in self._rows:
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_number(self, order_number: str) -> PurchaseOrder | None:
        for raw in self._rows:
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[PurchaseOrder]:
        return [self._to_domain(raw) for raw in sorted(self._rows, key=lambda r: r["id"])]

    def save(self, order: PurchaseOrder) -> None:
        if order.id is None:
            order.id = next_id(self._rows)
        upsert(self._rows, self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: PurchaseOrder) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "supplier_id": order.supplier_id,
            "status": order.status.value,
            "order_date": order.order_date.isoformat(),
            "expected_date": order.expected_date.isoformat() if order.expected_date else None,
            "received_date": order.received_date.isoformat() if order.received_date else None,
            "total_amount": str(order.total_amount.amount),
            "notes": order.notes,
            "created_by": order.created_by,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> PurchaseOrder:
        return PurchaseOrder(
            id=raw["id"],
            order_number=raw["order_number"],
            supplier_id=raw["supplier_id"],
            status=OrderStatus(raw["status"]),
            order_date=date.fromisoformat(raw["order_date"]),
            expected_date=_date_or_none(raw.get("expected_date")),
            received_date=_date_or_none(raw.get("received_date")),
            total_amount=Money(Decimal(raw["total_amount"])),
            notes=raw.get("notes"),
            created_by=raw.get("created_by"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
