"""Application service: Update Product and Deactivate Product use cases.

Neither touches ``current_stock``; stock only moves through the ledger.
Existing order lines keep the price agreed when they were created.
"""

from __future__ import annotations

import structlog

from procure.application.dto import ProductDTO
from procure.application.mapping import product_to_dto
from procure.domain.exceptions import EntityKind, EntityNotFoundError
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.model.value_objects import Money
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

_UNSET = object()


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def handle(
        self,
        product_id: int,
        name: str | None = None,
        unit_price: str | None = None,
        min_stock: int | None = None,
        max_stock=_UNSET,
        description=_UNSET,
        actor: str | None = None,
    ) -> ProductDTO:
        """Change catalog details; omitted arguments keep their value.

        ``max_stock`` and ``description`` may be passed as None to clear
        them, hence the sentinel default.
        """
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(EntityKind.PRODUCT, product_id)

            before = product_to_dto(product).to_payload()
            product.update_details(
                name=name if name is not None else product.name,
                unit_price=Money.of(unit_price) if unit_price is not None else product.unit_price,
                min_stock=min_stock if min_stock is not None else product.min_stock,
                max_stock=product.max_stock if max_stock is _UNSET else max_stock,
                description=product.description if description is _UNSET else description,
            )
            uow.products.save(product)
            uow.commit()

        dto = product_to_dto(product)
        logger.info("product.updated", product_id=product_id, actor=actor)
        self._audit.record(
            AuditFact(
                action=AuditAction.UPDATE,
                entity_type=AuditEntity.PRODUCT,
                entity_id=product_id,
                old_values=before,
                new_values=dto.to_payload(),
                actor=actor,
            )
        )
        return dto


class DeactivateProductHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def handle(self, product_id: int, actor: str | None = None) -> ProductDTO:
        """Soft-delete a product. Its movements and order lines remain."""
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(EntityKind.PRODUCT, product_id)
            product.deactivate()
            uow.products.save(product)
            uow.commit()

        logger.info("product.deactivated", product_id=product_id, code=product.code, actor=actor)
        self._audit.record(
            AuditFact(
                action=AuditAction.UPDATE,
                entity_type=AuditEntity.PRODUCT,
                entity_id=product_id,
                old_values={"active": True},
                new_values={"active": False},
                actor=actor,
            )
        )
        return product_to_dto(product)
