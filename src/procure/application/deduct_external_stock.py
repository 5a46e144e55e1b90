"""Application service: External Stock Deduction use case.

The integration surface for outside systems (billing, point of sale)
that sell stock without a purchase order. Products are addressed by
code, and running out of stock is answered with an ERROR result rather
than an exception so machine callers can branch on ``status``.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from procure.application.dto import DeductionResultDTO
from procure.application.schemas import ExternalStockDeductionRequest
from procure.domain.exceptions import (
    EntityKind,
    EntityNotFoundError,
    InsufficientStockError,
)
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.model.movement import ReferenceType
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)

DEFAULT_SOURCE_SYSTEM = "EXTERNAL_BILLING"
DEFAULT_DEDUCTION_NOTES = "Deduction from external billing system"


class DeductExternalStockHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        audit_recorder: AuditRecorder,
        default_source_system: str = DEFAULT_SOURCE_SYSTEM,
    ) -> None:
        self._uow = uow
        self._audit = audit_recorder
        self._default_source_system = default_source_system

    def handle(
        self,
        request: ExternalStockDeductionRequest,
        actor: str | None = None,
    ) -> DeductionResultDTO:
        source_system = request.source_system or self._default_source_system
        log = logger.bind(
            product_code=request.product_code,
            source_system=source_system,
            actor=actor,
        )

        with self._uow as uow:
            product = uow.products.get_by_code(request.product_code)
            if product is None or not product.active:
                raise EntityNotFoundError(EntityKind.PRODUCT, request.product_code)

            previous_stock = product.current_stock
            ledger = StockLedger(uow.products, uow.movements)
            try:
                movement = ledger.decrease(
                    product,
                    request.quantity,
                    reference_type=ReferenceType.SALE,
                    source_system=source_system,
                    notes=request.notes or DEFAULT_DEDUCTION_NOTES,
                    actor=actor,
                )
            except InsufficientStockError as exc:
                log.warning(
                    "external_deduction.insufficient_stock",
                    available=exc.available,
                    requested=exc.requested,
                )
                return DeductionResultDTO.error(
                    product_code=request.product_code,
                    message=str(exc),
                    timestamp=datetime.now(timezone.utc),
                )
            uow.commit()

        log.info(
            "external_deduction.processed",
            quantity=request.quantity,
            previous_stock=previous_stock,
            current_stock=product.current_stock,
        )
        self._audit.record(
            AuditFact(
                action=AuditAction.STOCK_DECREASE,
                entity_type=AuditEntity.PRODUCT,
                entity_id=product.id,  # type: ignore[arg-type]
                old_values={"currentStock": previous_stock},
                new_values={
                    "currentStock": product.current_stock,
                    "quantity": request.quantity,
                    "referenceType": ReferenceType.SALE.value,
                    "sourceSystem": source_system,
                    "movementId": movement.id,
                },
                actor=actor,
            )
        )
        return DeductionResultDTO.success(
            product_code=product.code,
            product_name=product.name,
            quantity_deducted=request.quantity,
            previous_stock=previous_stock,
            current_stock=product.current_stock,
            source_system=movement.source_system,
            movement_id=movement.id,  # type: ignore[arg-type]
            timestamp=movement.created_at,
        )
