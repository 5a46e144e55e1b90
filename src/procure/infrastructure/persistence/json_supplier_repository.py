"""JSON-backed implementation of SupplierRepository."""

from __future__ import annotations

from datetime import datetime

from procure.domain.model.supplier import Supplier
from procure.domain.repository.supplier_repository import SupplierRepository
from procure.infrastructure.persistence.rows import next_id, upsert


class JsonSupplierRepository(SupplierRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    def get_by_id(self, supplier_id: int) -> Supplier | None:
        for raw in self._rows:
            if raw["id"] == supplier_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Supplier]:
        return [self._to_domain(raw) for raw in sorted(self._rows, key=lambda r: r["id"])]

    def save(self, supplier: Supplier) -> None:
        if supplier.id is None:
            supplier.id = next_id(self._rows)
        upsert(self._rows, self._to_raw(supplier))

    @staticmethod
    def _to_raw(supplier: Supplier) -> dict:
        return {
            "id": supplier.id,
            "name": supplier.name,
            "contact_person": supplier.contact_person,
            "email": supplier.email,
            "phone": supplier.phone,
            "address": supplier.address,
            "active": supplier.active,
            "created_at": supplier.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Supplier:
        return Supplier(
            id=raw["id"],
            name=raw["name"],
            contact_person=raw.get("contact_person"),
            email=raw.get("email"),
            phone=raw.get("phone"),
            address=raw.get("address"),
            active=raw["active"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
