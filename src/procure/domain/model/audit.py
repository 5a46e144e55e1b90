"""Audit facts — structured records of what a use case changed.

The use case decides *what* to record and hands one AuditFact to an
AuditRecorder. How the fact is stored or rendered is up to the recorder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class AuditAction(Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    STOCK_INCREASE = "STOCK_INCREASE"
    STOCK_DECREASE = "STOCK_DECREASE"
    ORDER_RECEIVE = "ORDER_RECEIVE"


class AuditEntity(Enum):
    PRODUCT = "PRODUCT"
    SUPPLIER = "SUPPLIER"
    PURCHASE_ORDER = "PURCHASE_ORDER"


@dataclass(frozen=True)
class AuditFact:

    action: AuditAction
    entity_type: AuditEntity
    entity_id: int
    old_values: dict | None = None
    new_values: dict | None = None
    actor: str | None = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "action": self.action.value,
            "entityType": self.entity_type.value,
            "entityId": self.entity_id,
            "oldValues": self.old_values,
            "newValues": self.new_values,
            "actor": self.actor,
            "occurredAt": self.occurred_at.isoformat(),
        }
