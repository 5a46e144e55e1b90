"""Application service: Adjust Stock use case.

Sets a product's stock to an absolute count, e.g. after a physical
stocktake. The difference is posted as one ADJUSTMENT movement.
"""

from __future__ import annotations

import structlog

from procure.application.dto import StockChangeDTO
from procure.application.mapping import movement_to_dto
from procure.domain.exceptions import EntityKind, EntityNotFoundError
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class AdjustStockHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def handle(
        self,
        product_id: int,
        new_stock: int,
        notes: str | None = None,
        actor: str | None = None,
    ) -> StockChangeDTO:
        """Bring the product to *new_stock*.

        When the stock already matches nothing is posted, nothing is
        audited and the returned DTO has no movement.
        """
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(EntityKind.PRODUCT, product_id)

            previous_stock = product.current_stock
            ledger = StockLedger(uow.products, uow.movements)
            movement = ledger.adjust_to(product, new_stock, notes=notes, actor=actor)
            if movement is not None:
                uow.commit()

        if movement is None:
            logger.info("stock.adjust_unchanged", product_code=product.code, stock=new_stock)
            return StockChangeDTO(
                product_id=product.id,  # type: ignore[arg-type]
                product_code=product.code,
                previous_stock=previous_stock,
                current_stock=previous_stock,
                movement=None,
            )

        logger.info(
            "stock.adjusted",
            product_code=product.code,
            previous_stock=previous_stock,
            current_stock=product.current_stock,
            actor=actor,
        )
        self._audit.record(
            AuditFact(
                action=(
                    AuditAction.STOCK_INCREASE
                    if movement.is_inbound
                    else AuditAction.STOCK_DECREASE
                ),
                entity_type=AuditEntity.PRODUCT,
                entity_id=product.id,  # type: ignore[arg-type]
                old_values={"currentStock": previous_stock},
                new_values={
                    "currentStock": product.current_stock,
                    "quantity": movement.quantity,
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
