"""Application service: Receive Order use case.

Records a batch of goods arriving against a purchase order. For each
``(order_detail_id, quantity)`` pair the line's received quantity grows
and the product's stock is increased through the StockLedger. The order
status is re-evaluated once for the whole batch.

The batch is all-or-nothing. Every pair is validated before anything
is mutated, and the unit of work discards all changes if anything still
fails halfway through.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import structlog

from procure.application.dto import ReceiptSummaryDTO, ReceivedLineDTO
from procure.application.schemas import ReceiveOrderRequest
from procure.domain.exceptions import (
    EntityKind,
    EntityNotFoundError,
    InvalidOrderOperationError,
)
from procure.domain.model.audit import AuditAction, AuditEntity, AuditFact
from procure.domain.model.movement import ReferenceType
from procure.domain.model.order_detail import OrderDetail
from procure.domain.model.product import Product
from procure.domain.model.purchase_order import PurchaseOrder
from procure.domain.model.receipt import ReceiptRecord
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.domain.service.order_lifecycle import OrderLifecycle
from procure.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)

RECEIPT_SOURCE = "ORDER_RECEIPT"
DEFAULT_RECEIPT_NOTES = "Purchase order receipt"


class ReceiveOrderHandler:

    def __init__(self, uow: UnitOfWork, audit_recorder: AuditRecorder) -> None:
        self._uow = uow
        self._audit = audit_recorder

    def handle(
        self,
        order_id: int,
        request: ReceiveOrderRequest,
        actor: str | None = None,
    ) -> ReceiptSummaryDTO:
        """Receive goods against *order_id*.

        Steps:
        1. Answer from the stored receipt if the idempotency key was seen.
        2. Resolve the order and refuse terminal orders.
        3. Resolve and validate every line (no mutation yet).
        4. Receive each non-zero line and post its stock increase.
        5. Re-evaluate the order status once, commit, emit one audit fact.
        """
        log = logger.bind(order_id=order_id, actor=actor)

        with self._uow as uow:
            key = request.idempotency_key
            if key is not None:
                replay = self._replay(uow, order_id, key)
                if replay is not None:
                    log.info("receiving.replayed", idempotency_key=key)
                    return replay

            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(EntityKind.ORDER, order_id)
            OrderLifecycle.ensure_receivable(order)

            # Phase 1: resolve and validate every pair
            planned = self._plan(uow, order, request)

            # Phase 2: mutate
            previous_status = order.status
            previous_received_date = order.received_date
            ledger = StockLedger(uow.products, uow.movements)
            received_lines: list[ReceivedLineDTO] = []

            for detail, product, quantity in planned:
                previously_received = detail.quantity_received
                if quantity > 0:
                    detail.receive(quantity)
                    uow.order_details.save(detail)
                    ledger.increase(
                        product,
                        quantity,
                        reference_type=ReferenceType.PURCHASE_ORDER,
                        reference_id=order.id,
                        source_system=RECEIPT_SOURCE,
                        notes=request.notes or DEFAULT_RECEIPT_NOTES,
                        actor=actor,
                    )
                    log.info(
                        "receiving.line_received",
                        product_code=product.code,
                        quantity=quantity,
                        stock=product.current_stock,
                    )
                received_lines.append(
                    self._line_summary(detail, product, previously_received, quantity)
                )

            batch_date = request.received_date or date.today()
            lines = uow.order_details.list_by_order(order.id)  # type: ignore[arg-type]
            OrderLifecycle.apply_receipt(order, lines, batch_date)
            uow.orders.save(order)

            summary = ReceiptSummaryDTO(
                order_id=order.id,  # type: ignore[arg-type]
                order_number=order.order_number,
                status=order.status.value,
                received_date=batch_date.isoformat(),
                processed_at=datetime.now(timezone.utc).isoformat(),
                notes=request.notes,
                received_details=received_lines,
                fully_received=all(line.is_fully_received for line in lines),
            )
            if key is not None:
                uow.receipts.add(
                    ReceiptRecord(
                        idempotency_key=key,
                        order_id=order.id,  # type: ignore[arg-type]
                        summary=summary.to_payload(),
                    )
                )
            uow.commit()

        log.info(
            "receiving.processed",
            order_number=order.order_number,
            status=order.status.value,
            lines=len(received_lines),
        )
        self._audit.record(
            AuditFact(
                action=AuditAction.ORDER_RECEIVE,
                entity_type=AuditEntity.PURCHASE_ORDER,
                entity_id=order.id,  # type: ignore[arg-type]
                old_values={
                    "status": previous_status.value,
                    "receivedDate": (
                        previous_received_date.isoformat()
                        if previous_received_date else None
                    ),
                },
                new_values=summary.to_payload(),
                actor=actor,
            )
        )
        return summary

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _replay(
        uow: UnitOfWork, order_id: int, key: str
    ) -> ReceiptSummaryDTO | None:
        record = uow.receipts.get_by_key(key)
        if record is None:
            return None
        if record.order_id != order_id:
            raise InvalidOrderOperationError(
                f"Idempotency key '{key}' was already used for order #{record.order_id}"
            )
        return ReceiptSummaryDTO.from_payload(record.summary, replayed=True)

    @staticmethod
    def _plan(
        uow: UnitOfWork,
        order: PurchaseOrder,
        request: ReceiveOrderRequest,
    ) -> list[tuple[OrderDetail, Product, int]]:
        """Resolve every pair and check it can be received, without mutating.

        A product shared by several lines is loaded once so every increase
        lands on the same object.
        """
        planned: list[tuple[OrderDetail, Product, int]] = []
        products: dict[int, Product] = {}
        seen: set[int] = set()

        for item in request.received_details:
            detail_id = item.order_detail_id
            if detail_id in seen:
                raise InvalidOrderOperationError(
                    f"Order line #{detail_id} appears more than once in the batch"
                )
            seen.add(detail_id)

            detail = uow.order_details.get_by_id(detail_id)
            if detail is None:
                raise InvalidOrderOperationError(f"Order line not found: {detail_id}")
            if detail.order_id != order.id:
                raise InvalidOrderOperationError(
                    f"Order line #{detail_id} does not belong to order {order.order_number}"
                )

            product = products.get(detail.product_id)
            if product is None:
                product = uow.products.get_by_id(detail.product_id)
                if product is None:
                    raise EntityNotFoundError(EntityKind.PRODUCT, detail.product_id)
                products[detail.product_id] = product

            if item.quantity_received > 0:
                detail.check_receivable(item.quantity_received)
            planned.append((detail, product, item.quantity_received))

        return planned

    @staticmethod
    def _line_summary(
        detail: OrderDetail,
        product: Product,
        previously_received: int,
        quantity: int,
    ) -> ReceivedLineDTO:
        return ReceivedLineDTO(
            order_detail_id=detail.id,  # type: ignore[arg-type]
            product_id=product.id,  # type: ignore[arg-type]
            product_code=product.code,
            product_name=product.name,
            quantity_ordered=detail.quantity_ordered.value,
            quantity_previously_received=previously_received,
            quantity_received=quantity,
            quantity_total_received=detail.quantity_received,
            quantity_pending=detail.pending_quantity,
            fully_received=detail.is_fully_received,
        )
