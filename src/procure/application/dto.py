"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Output DTOs render
themselves as camelCase payloads via ``to_payload()``; those field names
are the stable contract for integrating callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

SUCCESS = "SUCCESS"
ERROR = "ERROR"


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


# ── Inputs ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class OrderLineSpec:
    """Input: one line of a new purchase order.

    ``unit_price`` is the price agreed with the supplier; when omitted
    the product's catalog price is used.
    """

    product_id: int
    quantity: int
    unit_price: str | None = None


# ── Receiving ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReceivedLineDTO:
    """Output: what one receiving call did to one order line."""

    order_detail_id: int
    product_id: int
    product_code: str
    product_name: str
    quantity_ordered: int
    quantity_previously_received: int
    quantity_received: int
    quantity_total_received: int
    quantity_pending: int
    fully_received: bool

    def to_payload(self) -> dict:
        return {
            "orderDetailId": self.order_detail_id,
            "productId": self.product_id,
            "productCode": self.product_code,
            "productName": self.product_name,
            "quantityOrdered": self.quantity_ordered,
            "quantityPreviouslyReceived": self.quantity_previously_received,
            "quantityReceived": self.quantity_received,
            "quantityTotalReceived": self.quantity_total_received,
            "quantityPending": self.quantity_pending,
            "fullyReceived": self.fully_received,
        }

    @staticmethod
    def from_payload(raw: dict) -> ReceivedLineDTO:
        return ReceivedLineDTO(
            order_detail_id=raw["orderDetailId"],
            product_id=raw["productId"],
            product_code=raw["productCode"],
            product_name=raw["productName"],
            quantity_ordered=raw["quantityOrdered"],
            quantity_previously_received=raw["quantityPreviouslyReceived"],
            quantity_received=raw["quantityReceived"],
            quantity_total_received=raw["quantityTotalReceived"],
            quantity_pending=raw["quantityPending"],
            fully_received=raw["fullyReceived"],
        )


@dataclass(frozen=True)
class ReceiptSummaryDTO:
    """Output: the result of one receiving batch."""

    order_id: int
    order_number: str
    status: str
    received_date: str  # the batch date, which may differ from the order's stored date
    processed_at: str
    notes: str | None
    received_details: list[ReceivedLineDTO]
    fully_received: bool
    replayed: bool = False  # answered from a stored idempotent receipt

    def to_payload(self) -> dict:
        return {
            "orderId": self.order_id,
            "orderNumber": self.order_number,
            "status": self.status,
            "receivedDate": self.received_date,
            "processedAt": self.processed_at,
            "notes": self.notes,
            "receivedDetails": [d.to_payload() for d in self.received_details],
            "fullyReceived": self.fully_received,
        }

    @staticmethod
    def from_payload(raw: dict, replayed: bool = False) -> ReceiptSummaryDTO:
        return ReceiptSummaryDTO(
            order_id=raw["orderId"],
            order_number=raw["orderNumber"],
            status=raw["status"],
            received_date=raw["receivedDate"],
            processed_at=raw["processedAt"],
            notes=raw["notes"],
            received_details=[
                ReceivedLineDTO.from_payload(d) for d in raw["receivedDetails"]
            ],
            fully_received=raw["fullyReceived"],
            replayed=replayed,
        )


# ── Stock ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DeductionResultDTO:
    """Output: result of an external stock deduction.

    Either a SUCCESS carrying the stock figures and movement id, or an
    ERROR carrying only the product code and a message.
    """

    status: str
    product_code: str
    timestamp: str
    product_name: str | None = None
    quantity_deducted: int | None = None
    previous_stock: int | None = None
    current_stock: int | None = None
    source_system: str | None = None
    movement_id: int | None = None
    message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS

    @staticmethod
    def success(
        product_code: str,
        product_name: str,
        quantity_deducted: int,
        previous_stock: int,
        current_stock: int,
        source_system: str | None,
        movement_id: int,
        timestamp: datetime,
    ) -> DeductionResultDTO:
        return DeductionResultDTO(
            status=SUCCESS,
            product_code=product_code,
            product_name=product_name,
            quantity_deducted=quantity_deducted,
            previous_stock=previous_stock,
            current_stock=current_stock,
            source_system=source_system,
            movement_id=movement_id,
            message="Stock deducted successfully",
            timestamp=timestamp.isoformat(),
        )

    @staticmethod
    def error(product_code: str, message: str, timestamp: datetime) -> DeductionResultDTO:
        return DeductionResultDTO(
            status=ERROR,
            product_code=product_code,
            message=message,
            timestamp=timestamp.isoformat(),
        )

    def to_payload(self) -> dict:
        if not self.is_success:
            return {
                "productCode": self.product_code,
                "status": self.status,
                "message": self.message,
                "timestamp": self.timestamp,
            }
        return {
            "productCode": self.product_code,
            "productName": self.product_name,
            "quantityDeducted": self.quantity_deducted,
            "previousStock": self.previous_stock,
            "currentStock": self.current_stock,
            "sourceSystem": self.source_system,
            "timestamp": self.timestamp,
            "movementId": self.movement_id,
            "status": self.status,
        }


@dataclass(frozen=True)
class MovementDTO:
    """Output: one ledger entry."""

    id: int
    product_id: int
    movement_type: str
    quantity: int
    signed_quantity: int
    reference_type: str | None
    reference_id: int | None
    source_system: str | None
    notes: str | None
    created_by: str | None
    created_at: str

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "movementType": self.movement_type,
            "quantity": self.quantity,
            "signedQuantity": self.signed_quantity,
            "referenceType": self.reference_type,
            "referenceId": self.reference_id,
            "sourceSystem": self.source_system,
            "notes": self.notes,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class StockChangeDTO:
    """Output: an internal stock update or adjustment.

    ``movement`` is None when an adjustment found nothing to change.
    """

    product_id: int
    product_code: str
    previous_stock: int
    current_stock: int
    movement: MovementDTO | None

    def to_payload(self) -> dict:
        return {
            "productId": self.product_id,
            "productCode": self.product_code,
            "previousStock": self.previous_stock,
            "currentStock": self.current_stock,
            "movement": self.movement.to_payload() if self.movement else None,
        }


@dataclass(frozen=True)
class LedgerBalanceDTO:

    product_id: int
    product_code: str
    current_stock: int
    ledger_stock: int
    movement_count: int
    balanced: bool

    def to_payload(self) -> dict:
        return {
            "productId": self.product_id,
            "productCode": self.product_code,
            "currentStock": self.current_stock,
            "ledgerStock": self.ledger_stock,
            "movementCount": self.movement_count,
            "balanced": self.balanced,
        }


@dataclass(frozen=True)
class ReconciliationReportDTO:

    balances: list[LedgerBalanceDTO]
    generated_at: str

    @property
    def all_balanced(self) -> bool:
        return all(b.balanced for b in self.balances)

    @property
    def discrepancies(self) -> list[LedgerBalanceDTO]:
        return [b for b in self.balances if not b.balanced]

    def to_payload(self) -> dict:
        return {
            "generatedAt": self.generated_at,
            "allBalanced": self.all_balanced,
            "balances": [b.to_payload() for b in self.balances],
        }


# ── Catalog ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ProductDTO:
    """Output: a catalog product with its stock signals."""

    id: int
    code: str
    name: str
    description: str | None
    unit_price: str
    current_stock: int
    min_stock: int
    max_stock: int | None
    active: bool
    low_stock: bool
    out_of_stock: bool
    over_stock: bool

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "unitPrice": self.unit_price,
            "currentStock": self.current_stock,
            "minStock": self.min_stock,
            "maxStock": self.max_stock,
            "active": self.active,
            "lowStock": self.low_stock,
            "outOfStock": self.out_of_stock,
            "overStock": self.over_stock,
        }


@dataclass(frozen=True)
class SupplierDTO:

    id: int
    name: str
    contact_person: str | None
    email: str | None
    phone: str | None
    address: str | None
    active: bool

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "contactPerson": self.contact_person,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "active": self.active,
        }


# ── Orders ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    id: int
    product_id: int
    product_code: str
    product_name: str
    quantity_ordered: int
    quantity_received: int
    quantity_pending: int
    unit_price: str
    total_price: str

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "productCode": self.product_code,
            "productName": self.product_name,
            "quantityOrdered": self.quantity_ordered,
            "quantityReceived": self.quantity_received,
            "quantityPending": self.quantity_pending,
            "unitPrice": self.unit_price,
            "totalPrice": self.total_price,
        }


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete purchase order as displayed to the user."""

    id: int
    order_number: str
    supplier_id: int
    supplier_name: str
    status: str
    order_date: str
    expected_date: str | None
    received_date: str | None
    total_amount: str
    notes: str | None
    overdue: bool
    created_by: str | None
    lines: list[OrderLineDTO] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "orderNumber": self.order_number,
            "supplierId": self.supplier_id,
            "supplierName": self.supplier_name,
            "status": self.status,
            "orderDate": self.order_date,
            "expectedDate": self.expected_date,
            "receivedDate": self.received_date,
            "totalAmount": self.total_amount,
            "notes": self.notes,
            "overdue": self.overdue,
            "createdBy": self.created_by,
            "lines": [line.to_payload() for line in self.lines],
        }
