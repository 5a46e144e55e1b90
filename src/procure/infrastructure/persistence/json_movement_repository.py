"""JSON-backed implementation of MovementRepository (append only)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from procure.domain.model.movement import InventoryMovement, MovementType, ReferenceType
from procure.domain.repository.movement_repository import MovementRepository
from procure.infrastructure.persistence.rows import next_id


class JsonMovementRepository(MovementRepository):

    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    def add(self, movement: InventoryMovement) -> InventoryMovement:
        stored = replace(movement, id=next_id(self._rows))
        self._rows.append(self._to_raw(stored))
        return stored

    def list_by_product(self, product_id: int) -> list[InventoryMovement]:
        return [
            self._to_domain(raw) for raw in self._rows if raw["product_id"] == product_id
        ]

    def list_all(self) -> list[InventoryMovement]:
        return [self._to_domain(raw) for raw in self._rows]

    @staticmethod
    def _to_raw(movement: InventoryMovement) -> dict:
        return {
            "id": movement.id,
            "product_id": movement.product_id,
            "movement_type": movement.movement_type.value,
            "quantity": movement.quantity,
            "reference_type": movement.reference_type.value if movement.reference_type else None,
            "reference_id": movement.reference_id,
            "source_system": movement.source_system,
            "notes": movement.notes,
            "created_by": movement.created_by,
            "created_at": movement.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryMovement:
        return InventoryMovement(
            id=raw["id"],
            product_id=raw["product_id"],
            movement_type=MovementType(raw["movement_type"]),
            quantity=raw["quantity"],
            reference_type=(
                ReferenceType(raw["reference_type"]) if raw.get("reference_type") else None
            ),
            reference_id=raw.get("reference_id"),
            source_system=raw.get("source_system"),
            notes=raw.get("notes"),
            created_by=raw.get("created_by"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
