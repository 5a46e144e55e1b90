"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from procure.application.dto import ProductDTO
from procure.application.mapping import product_to_dto
from procure.domain.exceptions import (
    DuplicateIdentifierError,
    IdentifierKind,
    ValidationError,
)
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.model.movement import ReferenceType
from procure.domain.model.product import Product
from procure.domain.model.value_objects import Money
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.domain.service.stock_ledger import SYSTEM_SOURCE, StockLedger

logger = structlog.get_logger(__name__)

INITIAL_STOCK_NOTES = "Initial stock"


class AddProductHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def handle(
        self,
        code: str,
        name: str,
        unit_price: str,
        initial_stock: int = 0,
        min_stock: int = 0,
        max_stock: int | None = None,
        description: str | None = None,
        actor: str | None = None,
    ) -> ProductDTO:
        """Add a product to the catalog.

        A non-zero ``initial_stock`` is posted through the ledger as an
        ADJUSTMENT, so even the opening balance has a movement behind it.
        """
        if initial_stock < 0:
            raise ValidationError("Initial stock cannot be negative")

        with self._uow as uow:
            if uow.products.get_by_code(code.strip()) is not None:
                raise DuplicateIdentifierError(IdentifierKind.PRODUCT_CODE, code.strip())

            product = Product.create(
                code=code,
                name=name,
                unit_price=Money.of(unit_price),
                min_stock=min_stock,
                max_stock=max_stock,
                description=description,
            )
            uow.products.save(product)

            if initial_stock > 0:
                StockLedger(uow.products, uow.movements).increase(
                    product,
                    initial_stock,
                    reference_type=ReferenceType.ADJUSTMENT,
                    source_system=SYSTEM_SOURCE,
                    notes=INITIAL_STOCK_NOTES,
                    actor=actor,
                )
            uow.commit()

        dto = product_to_dto(product)
        logger.info("product.created", product_id=product.id, code=product.code, actor=actor)
        self._audit.record(
            AuditFact(
                action=AuditAction.CREATE,
                entity_type=AuditEntity.PRODUCT,
                entity_id=product.id,  # type: ignore[arg-type]
                new_values=dto.to_payload(),
                actor=actor,
            )
        )
        return dto
