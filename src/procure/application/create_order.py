"""Application service: Create Purchase Order use case.

Coordinates the Supplier and Product lookups with the creation of the
PurchaseOrder and its lines. Lines are stored separately and refer to
the order by ID, so the order is saved first to obtain one.
"""

from __future__ import annotations

from datetime import date

import structlog

from procure.application.dto import OrderDTO, OrderLineSpec
from procure.application.mapping import order_to_dto
from procure.domain.exceptions import (
    DuplicateIdentifierError,
    EntityKind,
    EntityNotFoundError,
    IdentifierKind,
    InvalidOrderOperationError,
    ValidationError,
)
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.model.order_detail import OrderDetail
from procure.domain.model.product import Product
from procure.domain.model.purchase_order import PurchaseOrder
from procure.domain.model.value_objects import Money, Quantity
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def handle(
        self,
        order_number: str,
        supplier_id: int,
        line_specs: list[OrderLineSpec],
        order_date: date | None = None,
        expected_date: date | None = None,
        notes: str | None = None,
        actor: str | None = None,
    ) -> OrderDTO:
        """Create a PENDING purchase order.

        Steps:
        1. Reject a duplicate order number and an unknown or inactive supplier.
        2. Resolve every line's product (must exist and be active).
        3. Save the order, then its lines, then the computed total.
        """
        if not line_specs:
            raise ValidationError("A purchase order needs at least one line")

        with self._uow as uow:
            if uow.orders.get_by_number(order_number.strip()) is not None:
                raise DuplicateIdentifierError(IdentifierKind.ORDER_NUMBER, order_number.strip())

            supplier = uow.suppliers.get_by_id(supplier_id)
            if supplier is None:
                raise EntityNotFoundError(EntityKind.SUPPLIER, supplier_id)
            if not supplier.active:
                raise InvalidOrderOperationError(
                    f"Supplier {supplier.name} is inactive and cannot receive orders"
                )

            products: dict[int, Product] = {}
            for spec in line_specs:
                product = uow.products.get_by_id(spec.product_id)
                if product is None or not product.active:
                    raise EntityNotFoundError(EntityKind.PRODUCT, spec.product_id)
                products[product.id] = product  # type: ignore[index]

            order = PurchaseOrder.create(
                order_number=order_number,
                supplier_id=supplier_id,
                order_date=order_date or date.today(),
                expected_date=expected_date,
                notes=notes,
                created_by=actor,
            )
            uow.orders.save(order)

            lines: list[OrderDetail] = []
            for spec in line_specs:
                product = products[spec.product_id]
                line = OrderDetail(
                    id=None,
                    order_id=order.id,  # type: ignore[arg-type]
                    product_id=spec.product_id,
                    quantity_ordered=Quantity(spec.quantity),
                    unit_price=(
                        Money.of(spec.unit_price)
                        if spec.unit_price is not None
                        else product.unit_price
                    ),
                )
                uow.order_details.save(line)
                lines.append(line)

            order.recalculate_total(lines)
            uow.orders.save(order)
            uow.commit()

        dto = order_to_dto(order, lines, products, supplier)
        logger.info(
            "order.created",
            order_id=order.id,
            order_number=order.order_number,
            lines=len(lines),
            total=str(order.total_amount),
            actor=actor,
        )
        self._audit.record(
            AuditFact(
                action=AuditAction.CREATE,
                entity_type=AuditEntity.PURCHASE_ORDER,
                entity_id=order.id,  # type: ignore[arg-type]
                new_values=dto.to_payload(),
                actor=actor,
            )
        )
        return dto
