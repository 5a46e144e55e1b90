"""Application service: internal stock increase and decrease.

Used by staff for stock changes that are not receipts or external
sales (returns, transfers, write-offs). Products are addressed by ID.
"""

from __future__ import annotations

import structlog

from procure.application.dto import StockChangeDTO
from procure.application.mapping import movement_to_dto
from procure.application.schemas import StockUpdateRequest
from procure.domain.exceptions import EntityKind, EntityNotFoundError
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.model.movement import MovementType
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class UpdateStockHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def increase(
        self,
        product_id: int,
        request: StockUpdateRequest,
        actor: str | None = None,
    ) -> StockChangeDTO:
        return self._apply(product_id, MovementType.IN, request, actor)

    def decrease(
        self,
        product_id: int,
        request: StockUpdateRequest,
        actor: str | None = None,
    ) -> StockChangeDTO:
        """Raises InsufficientStockError when stock would go negative."""
        return self._apply(product_id, MovementType.OUT, request, actor)

    def _apply(
        self,
        product_id: int,
        direction: MovementType,
        request: StockUpdateRequest,
        actor: str | None,
    ) -> StockChangeDTO:
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(EntityKind.PRODUCT, product_id)

            previous_stock = product.current_stock
            ledger = StockLedger(uow.products, uow.movements)
            post = ledger.increase if direction == MovementType.IN else ledger.decrease
            movement = post(
                product,
                request.quantity,
                reference_type=request.reference_type,
                reference_id=request.reference_id,
                source_system=request.source_system,
                notes=request.notes,
                actor=actor,
            )
            uow.commit()

        logger.info(
            "stock.updated",
            product_code=product.code,
            direction=direction.value,
            quantity=request.quantity,
            current_stock=product.current_stock,
            actor=actor,
        )
        self._audit.record(
            AuditFact(
                action=(
                    AuditAction.STOCK_INCREASE
                    if direction == MovementType.IN
                    else AuditAction.STOCK_DECREASE
                ),
                entity_type=AuditEntity.PRODUCT,
                entity_id=product.id,  # type: ignore[arg-type]
                old_values={"currentStock": previous_stock},
                new_values={
                    "currentStock": product.current_stock,
                    "quantity": request.quantity,
                    "movementId": movement.id,
                },
                actor=actor,
            )
        )
        return StockChangeDTO(
            product_id=product.id,  # type: ignore[arg-type]
            product_code=product.code,
            previous_stock=previous_stock,
            current_stock=product.current_stock,
            movement=movement_to_dto(movement),
        )
