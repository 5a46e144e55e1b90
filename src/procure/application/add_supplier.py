"""Application service: Add Supplier and List Suppliers use cases."""

from __future__ import annotations

import structlog

from procure.application.dto import SupplierDTO
from procure.application.mapping import supplier_to_dto
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.model.supplier import Supplier
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddSupplierHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def handle(
        self,
        name: str,
        contact_person: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        address: str | None = None,
        actor: str | None = None,
    ) -> SupplierDTO:
        supplier = Supplier.create(
            name=name,
            contact_person=contact_person,
            email=email,
            phone=phone,
            address=address,
        )
        with self._uow as uow:
            uow.suppliers.save(supplier)
            uow.commit()

        dto = supplier_to_dto(supplier)
        logger.info("supplier.created", supplier_id=supplier.id, actor=actor)
        self._audit.record(
            AuditFact(
                action=AuditAction.CREATE,
                entity_type=AuditEntity.SUPPLIER,
                entity_id=supplier.id,  # type: ignore[arg-type]
                new_values=dto.to_payload(),
                actor=actor,
            )
        )
        return dto


class ListSuppliersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[SupplierDTO]:
        with self._uow as uow:
            return [supplier_to_dto(s) for s in uow.suppliers.list_all()]
