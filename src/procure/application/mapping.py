"""Domain-to-DTO mapping shared by several use cases."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from procure.application.dto import (
    MovementDTO,
    OrderDTO,
    OrderLineDTO,
    ProductDTO,
    SupplierDTO,
)
from procure.domain.exceptions import EntityKind, EntityNotFoundError
from procure.domain.model.movement import InventoryMovement
from procure.domain.model.order_detail import OrderDetail
from procure.domain.model.product import Product
from procure.domain.model.purchase_order import PurchaseOrder
from procure.domain.model.supplier import Supplier
from procure.domain.repository.unit_of_work import UnitOfWork


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        code=product.code,
        name=product.name,
        description=product.description,
        unit_price=str(product.unit_price),
        current_stock=product.current_stock,
        min_stock=product.min_stock,
        max_stock=product.max_stock,
        active=product.active,
        low_stock=product.is_low_stock,
        out_of_stock=product.is_out_of_stock,
        over_stock=product.is_over_stock,
    )


def supplier_to_dto(supplier: Supplier) -> SupplierDTO:
    return SupplierDTO(
        id=supplier.id,  # type: ignore[arg-type]
        name=supplier.name,
        contact_person=supplier.contact_person,
        email=supplier.email,
        phone=supplier.phone,
        address=supplier.address,
        active=supplier.active,
    )


def movement_to_dto(movement: InventoryMovement) -> MovementDTO:
    return MovementDTO(
        id=movement.id,  # type: ignore[arg-type]
        product_id=movement.product_id,
        movement_type=movement.movement_type.value,
        quantity=movement.quantity,
        signed_quantity=movement.signed_quantity,
        reference_type=movement.reference_type.value if movement.reference_type else None,
        reference_id=movement.reference_id,
        source_system=movement.source_system,
        notes=movement.notes,
        created_by=movement.created_by,
        created_at=movement.created_at.isoformat(),
    )


def order_to_dto(
    order: PurchaseOrder,
    lines: Sequence[OrderDetail],
    products: dict[int, Product],
    supplier: Supplier,
    today: date | None = None,
) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        supplier_id=order.supplier_id,
        supplier_name=supplier.name,
        status=order.status.value,
        order_date=order.order_date.isoformat(),
        expected_date=order.expected_date.isoformat() if order.expected_date else None,
        received_date=order.received_date.isoformat() if order.received_date else None,
        total_amount=str(order.total_amount),
        notes=order.notes,
        overdue=order.is_overdue(today),
        created_by=order.created_by,
        lines=[
            OrderLineDTO(
                id=line.id,  # type: ignore[arg-type]
                product_id=line.product_id,
                product_code=products[line.product_id].code,
                product_name=products[line.product_id].name,
                quantity_ordered=line.quantity_ordered.value,
                quantity_received=line.quantity_received,
                quantity_pending=line.pending_quantity,
                unit_price=str(line.unit_price),
                total_price=str(line.total_price),
            )
            for line in lines
        ],
    )


def load_order_dto(uow: UnitOfWork, order: PurchaseOrder, today: date | None = None) -> OrderDTO:
    """Gather an order's lines, products and supplier and map them."""
    lines = uow.order_details.list_by_order(order.id)  # type: ignore[arg-type]
    products: dict[int, Product] = {}
    for line in lines:
        product = uow.products.get_by_id(line.product_id)
        if product is None:
            raise EntityNotFoundError(EntityKind.PRODUCT, line.product_id)
        products[line.product_id] = product
    supplier = uow.suppliers.get_by_id(order.supplier_id)
    if supplier is None:
        raise EntityNotFoundError(EntityKind.SUPPLIER, order.supplier_id)
    return order_to_dto(order, lines, products, supplier, today)
