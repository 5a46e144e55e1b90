"""InventoryMovement — one immutable entry in a product's stock ledger.

Movements are append-only: once created they are never updated or
deleted. The signed sum of a product's movements always equals its
``current_stock``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from procure.domain.exceptions import ValidationError

MAX_SOURCE_SYSTEM_LENGTH = 50
MAX_NOTES_LENGTH = 500


class MovementType(Enum):
    IN = "IN"
    OUT = "OUT"


class ReferenceType(Enum):
    PURCHASE_ORDER = "PURCHASE_ORDER"
    SALE = "SALE"
    ADJUSTMENT = "ADJUSTMENT"
    TRANSFER = "TRANSFER"
    RETURN = "RETURN"


@dataclass(frozen=True)
class InventoryMovement:

    id: int | None
    product_id: int
    movement_type: MovementType
    quantity: int
    reference_type: ReferenceType | None = None
    reference_id: int | None = None
    source_system: str | None = None
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationError("Movement quantity must be positive")
        if self.source_system is not None and len(self.source_system) > MAX_SOURCE_SYSTEM_LENGTH:
            raise ValidationError(
                f"Source system must be at most {MAX_SOURCE_SYSTEM_LENGTH} characters"
            )
        if self.notes is not None and len(self.notes) > MAX_NOTES_LENGTH:
            raise ValidationError(
                f"Notes must be at most {MAX_NOTES_LENGTH} characters"
            )

    @property
    def is_inbound(self) -> bool:
        return self.movement_type == MovementType.IN

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.is_inbound else -self.quantity
