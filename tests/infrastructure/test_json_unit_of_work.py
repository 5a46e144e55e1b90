"""Tests for the JSON-file store, exercised through the real handlers."""

import json

import pytest

from procure.application.add_product import AddProductHandler
from procure.application.add_supplier import AddSupplierHandler
from procure.application.create_order import CreateOrderHandler
from procure.application.dto import OrderLineSpec
from procure.application.receive_order import ReceiveOrderHandler
from procure.application.reconcile_ledger import ReconcileLedgerHandler
from procure.application.schemas import ReceiveOrderRequest, parse_request
from procure.domain.exceptions import InvalidReceiptQuantityError
from procure.domain.model.purchase_order import OrderStatus
from procure.infrastructure.persistence.json_unit_of_work import (
    COLLECTIONS,
    JsonUnitOfWork,
)
from tests.fakes import FakeAuditRecorder


def _setup(tmp_path):
    uow, audit = JsonUnitOfWork(tmp_path), FakeAuditRecorder()
    supplier = AddSupplierHandler(uow, audit).handle("Acme")
    product = AddProductHandler(uow, audit).handle(
        code="P1", name="Bolt", unit_price="0.50", initial_stock=10
    )
    order = CreateOrderHandler(uow, audit).handle(
        "PO-1", supplier.id, [OrderLineSpec(product.id, 4)]
    )
    return uow, audit, product, order


def _receive(uow, audit, order, quantity, key=None):
    data = {
        "receivedDetails": [
            {"orderDetailId": order.lines[0].id, "quantityReceived": quantity}
        ]
    }
    if key is not None:
        data["idempotencyKey"] = key
    return ReceiveOrderHandler(uow, audit).handle(
        order.id, parse_request(ReceiveOrderRequest, data)
    )


class TestFiles:

    def test_every_collection_created_on_first_use(self, tmp_path):
        with JsonUnitOfWork(tmp_path / "store"):
            pass
        for name in COLLECTIONS:
            assert json.loads((tmp_path / "store" / f"{name}.json").read_text()) == []

    def test_nested_use_rejected(self, tmp_path):
        uow = JsonUnitOfWork(tmp_path)
        with uow:
            with pytest.raises(RuntimeError):
                uow.__enter__()

    def test_commit_outside_block_rejected(self, tmp_path):
        with pytest.raises(RuntimeError):
            JsonUnitOfWork(tmp_path).commit()


class TestRoundTrip:

    def test_entities_survive_a_new_unit_of_work(self, tmp_path):
        _, _, product, order = _setup(tmp_path)

        with JsonUnitOfWork(tmp_path) as uow:
            stored = uow.products.get_by_code("P1")
            assert stored.id == product.id
            assert stored.current_stock == 10
            assert str(stored.unit_price) == "0.50"

            stored_order = uow.orders.get_by_number("PO-1")
            assert stored_order.status == OrderStatus.PENDING
            assert str(stored_order.total_amount) == "2.00"
            [line] = uow.order_details.list_by_order(order.id)
            assert line.quantity_ordered.value == 4

            [movement] = uow.movements.list_by_product(product.id)
            assert movement.id == 1
            assert movement.quantity == 10

    def test_ids_keep_counting_across_sessions(self, tmp_path):
        uow, audit, _, _ = _setup(tmp_path)
        second = AddProductHandler(uow, audit).handle(code="P2", name="Nut", unit_price="0.10")
        assert second.id == 2

    def test_receipt_is_stored(self, tmp_path):
        uow, audit, product, order = _setup(tmp_path)
        summary = _receive(uow, audit, order, 4)

        assert summary.status == "COMPLETED"
        with JsonUnitOfWork(tmp_path) as check:
            assert check.products.get_by_id(product.id).current_stock == 14
            assert check.order_details.list_by_order(order.id)[0].is_fully_received
        assert ReconcileLedgerHandler(uow).handle().all_balanced


class TestRollback:

    def test_failed_batch_leaves_files_untouched(self, tmp_path):
        uow, audit, _, order = _setup(tmp_path)
        before = {name: (tmp_path / f"{name}.json").read_text() for name in COLLECTIONS}

        with pytest.raises(InvalidReceiptQuantityError):
            _receive(uow, audit, order, 5)

        after = {name: (tmp_path / f"{name}.json").read_text() for name in COLLECTIONS}
        assert after == before

    def test_uncommitted_changes_are_dropped(self, tmp_path):
        _setup(tmp_path)
        with JsonUnitOfWork(tmp_path) as uow:
            product = uow.products.get_by_code("P1")
            product.name = "Changed"
            uow.products.save(product)

        with JsonUnitOfWork(tmp_path) as uow:
            assert uow.products.get_by_code("P1").name == "Bolt"

    def test_no_temporary_files_left_behind(self, tmp_path):
        _setup(tmp_path)
        assert list(tmp_path.glob("*.tmp")) == []


class TestIdempotentReplay:

    def test_replay_from_a_later_session(self, tmp_path):
        uow, audit, product, order = _setup(tmp_path)
        first = _receive(uow, audit, order, 2, key="batch-1")
        again = _receive(JsonUnitOfWork(tmp_path), audit, order, 2, key="batch-1")

        assert again.replayed
        assert again.to_payload() == first.to_payload()
        with JsonUnitOfWork(tmp_path) as check:
            assert check.products.get_by_id(product.id).current_stock == 12
            assert len(check.receipts.get_by_key("batch-1").summary["receivedDetails"]) == 1
