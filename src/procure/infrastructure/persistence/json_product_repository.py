"""JSON-backed implementation of ProductRepository.

Works on the ``products`` rows loaded by JsonUnitOfWork; nothing is
written to disk until the unit of work commits.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from procure.domain.model.product import Product
from procure.domain.model.value_objects import Money
from procure.domain.repository.product_repository import ProductRepository
from procure.infrastructure.persistence.rows import next_id, upsert


class JsonProductRepository(ProductRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in self._rows:
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_code(self, code: str) -> Product | None:
        for raw in self._rows:
            if raw["code"] == code:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in sorted(self._rows, key=lambda r: r["id"])]

    def save(self, product: Product) -> None:
        if product.id is None:
            product.id = next_id(self._rows)
        upsert(self._rows, self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "code": product.code,
            "name": product.name,
            "description": product.description,
            "unit_price": str(product.unit_price.amount),
            "current_stock": product.current_stock,
            "min_stock": product.min_stock,
            "max_stock": product.max_stock,
            "active": product.active,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            code=raw["code"],
            name=raw["name"],
            description=raw.get("description"),
            unit_price=Money(Decimal(raw["unit_price"])),
            current_stock=raw["current_stock"],
            min_stock=raw["min_stock"],
            max_stock=raw.get("max_stock"),
            active=raw["active"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
