"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON adapters but
keep everything in dicts. No file I/O, no side effects. FakeUnitOfWork
snapshots every store on entry and restores it unless committed, so
rollback behaves like the real thing.
"""

from __future__ import annotations

import copy
from dataclasses import replace

from procure.domain.model.audit import AuditFact
from procure.domain.model.movement import InventoryMovement
from procure.domain.model.order_detail import OrderDetail
from procure.domain.model.product import Product
from procure.domain.model.purchase_order import PurchaseOrder
from procure.domain.model.receipt import ReceiptRecord
from procure.domain.model.supplier import Supplier
from procure.domain.repository.audit_recorder import AuditRecorder
from procure.domain.repository.movement_repository import MovementRepository
from procure.domain.repository.order_detail_repository import OrderDetailRepository
from procure.domain.repository.product_repository import ProductRepository
from procure.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)
from procure.domain.repository.receipt_repository import ReceiptRepository
from procure.domain.repository.supplier_repository import SupplierRepository
from procure.domain.repository.unit_of_work import UnitOfWork


class _KeyedStore:

    def __init__(self) -> None:
        self._store: dict = {}
        self._next_id = 1

    def _assign_id(self, entity) -> None:
        if entity.id is None:
            entity.id = self._next_id
            self._next_id += 1
        self._store[entity.id] = entity


class FakeProductRepository(_KeyedStore, ProductRepository):

    def get_by_id(self, product_id: int) -> Product | None:
        return self._store.get(product_id)

    def get_by_code(self, code: str) -> Product | None:
        for p in self._store.values():
            if p.code == code:
                return p
        return None

    def list_all(self) -> list[Product]:
        return [self._store[k] for k in sorted(self._store)]

    def save(self, product: Product) -> None:
        self._assign_id(product)


class FakeSupplierRepository(_KeyedStore, SupplierRepository):

    def get_by_id(self, supplier_id: int) -> Supplier | None:
        return self._store.get(supplier_id)

    def list_all(self) -> list[Supplier]:
        return [self._store[k] for k in sorted(self._store)]

    def save(self, supplier: Supplier) -> None:
        self._assign_id(supplier)


class FakePurchaseOrderRepository(_KeyedStore, PurchaseOrderRepository):

    def get_by_id(self, order_id: int) -> PurchaseOrder | None:
        return self._store.get(order_id)

    def get_by_number(self, order_number: str) -> PurchaseOrder | None:
        for o in self._store.values():
            if o.order_number == order_number:
                return o
        return None

    def list_all(self) -> list[PurchaseOrder]:
        return [self._store[k] for k in sorted(self._store)]

    def save(self, order: PurchaseOrder) -> None:
        self._assign_id(order)


class FakeOrderDetailRepository(_KeyedStore, OrderDetailRepository):

    def get_by_id(self, detail_id: int) -> OrderDetail | None:
        return self._store.get(detail_id)

    def list_by_order(self, order_id: int) -> list[OrderDetail]:
        return [self._store[k] for k in sorted(self._store) if self._store[k].order_id == order_id]

    def save(self, detail: OrderDetail) -> None:
        self._assign_id(detail)


class FakeMovementRepository(MovementRepository):

    def __init__(self) -> None:
        self._movements: list[InventoryMovement] = []

    def add(self, movement: InventoryMovement) -> InventoryMovement:
        stored = replace(movement, id=len(self._movements) + 1)
        self._movements.append(stored)
        return stored

    def list_by_product(self, product_id: int) -> list[InventoryMovement]:
        return [m for m in self._movements if m.product_id == product_id]

    def list_all(self) -> list[InventoryMovement]:
        return list(self._movements)


class FakeReceiptRepository(ReceiptRepository):

    def __init__(self) -> None:
        self._store: dict[str, ReceiptRecord] = {}

    def get_by_key(self, idempotency_key: str) -> ReceiptRecord | None:
        return self._store.get(idempotency_key)

    def add(self, record: ReceiptRecord) -> None:
        self._store[record.idempotency_key] = record


class FakeUnitOfWork(UnitOfWork):

    def __init__(self) -> None:
        self.products = FakeProductRepository()
        self.suppliers = FakeSupplierRepository()
        self.orders = FakePurchaseOrderRepository()
        self.order_details = FakeOrderDetailRepository()
        self.movements = FakeMovementRepository()
        self.receipts = FakeReceiptRepository()
        self.commits = 0
        self._snapshot: dict | None = None
        self._committed = False

    def __enter__(self) -> FakeUnitOfWork:
        self._snapshot = copy.deepcopy(self._repos())
        self._committed = False
        return self

    def commit(self) -> None:
        self.commits += 1
        self._committed = True

    def rollback(self) -> None:
        if self._committed or self._snapshot is None:
            return
        for name, repo in self._snapshot.items():
            setattr(self, name, repo)
        self._snapshot = None

    def _repos(self) -> dict:
        return {
            "products": self.products,
            "suppliers": self.suppliers,
            "orders": self.orders,
            "order_details": self.order_details,
            "movements": self.movements,
            "receipts": self.receipts,
        }


class FakeAuditRecorder(AuditRecorder):

    def __init__(self) -> None:
        self.facts: list[AuditFact] = []

    def record(self, fact: AuditFact) -> None:
        self.facts.append(fact)
