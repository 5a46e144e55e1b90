"""Application service: Update Order Status use case.

Manual lifecycle moves such as confirming or cancelling an order.
Receipt-driven moves happen in ReceiveOrderHandler instead.
"""

from __future__ import annotations

import structlog

from procure.application.dto import OrderDTO
from procure.application.mapping import load_order_dto
from procure.domain.exceptions import EntityKind, EntityNotFoundError, ValidationError
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.model.purchase_order import OrderStatus
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.domain.service.order_lifecycle import OrderLifecycle

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def handle(
        self,
        order_id: int,
        new_status: str,
        notes: str | None = None,
        actor: str | None = None,
    ) -> OrderDTO:
        try:
            status = OrderStatus(new_status.upper())
        except ValueError:
            raise ValidationError(f"Unknown order status: '{new_status}'")

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(EntityKind.ORDER, order_id)

            previous = order.status
            OrderLifecycle.transition(order, status, notes=notes)
            uow.orders.save(order)
            dto = load_order_dto(uow, order)
            uow.commit()

        logger.info(
            "order.status_changed",
            order_number=order.order_number,
            old_status=previous.value,
            new_status=status.value,
            actor=actor,
        )
        self._audit.record(
            AuditFact(
                action=AuditAction.UPDATE,
                entity_type=AuditEntity.PURCHASE_ORDER,
                entity_id=order_id,
                old_values={"status": previous.value},
                new_values={"status": status.value, "notes": notes},
                actor=actor,
            )
        )
        return dto
