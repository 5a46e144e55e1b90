"""Domain service: Stock Ledger.

The only code path allowed to change ``Product.current_stock``. Every
change is paired with exactly one appended InventoryMovement, so the
signed sum of a product's movements always equals its stock.

The ledger knows nothing about orders. It runs inside the caller's unit
of work; the stock change and the movement are committed together or
not at all.
"""

from __future__ import annotations

from dataclasses import dataclass

from procure.domain.exceptions import ValidationError
from procure.domain.model.movement import InventoryMovement, MovementType, ReferenceType
from procure.domain.model.product import Product
from procure.domain.repository.movement_repository import MovementRepository
from procure.domain.repository.product_repository import ProductRepository

SYSTEM_SOURCE = "SYSTEM"


@dataclass(frozen=True)
class LedgerBalance:
    """Stock on the product versus stock implied by its movements."""

    product_id: int
    code: str
    current_stock: int
    ledger_stock: int
    movement_count: int

    @property
    def difference(self) -> int:
        return self.current_stock - self.ledger_stock

    @property
    def is_balanced(self) -> bool:
        return self.difference == 0


class StockLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        movement_repo: MovementRepository,
    ) -> None:
        self._product_repo = product_repo
        self._movement_repo = movement_repo

    def increase(
        self,
        product: Product,
        quantity: int,
        reference_type: ReferenceType | None = None,
        reference_id: int | None = None,
        source_system: str | None = None,
        notes: str | None = None,
        actor: str | None = None,
    ) -> InventoryMovement:
        """Add *quantity* units to *product* and append an IN movement.

        There is no upper bound here; exceeding ``max_stock`` is only
        reported by the alert queries.
        """
        movement = self._build(
            product, MovementType.IN, quantity,
            reference_type, reference_id, source_system, notes, actor,
        )
        product.post_inbound(quantity)
        return self._post(product, movement)

    def decrease(
        self,
        product: Product,
        quantity: int,
        reference_type: ReferenceType | None = None,
        reference_id: int | None = None,
        source_system: str | None = None,
        notes: str | None = None,
        actor: str | None = None,
    ) -> InventoryMovement:
        """Remove *quantity* units from *product* and append an OUT movement.

        Raises InsufficientStockError, leaving the product untouched, when
        fewer than *quantity* units are on hand.
        """
        movement = self._build(
            product, MovementType.OUT, quantity,
            reference_type, reference_id, source_system, notes, actor,
        )
        product.post_outbound(quantity)
        return self._post(product, movement)

    def adjust_to(
        self,
        product: Product,
        new_stock: int,
        notes: str | None = None,
        actor: str | None = None,
    ) -> InventoryMovement | None:
        """Bring *product* to an absolute stock level.

        The difference is posted as a single ADJUSTMENT movement. Returns
        None when the stock already equals *new_stock*.
        """
        if new_stock < 0:
            raise ValidationError("Stock cannot be adjusted to a negative value")

        difference = new_stock - product.current_stock
        if difference == 0:
            return None
        if difference > 0:
            return self.increase(
                product, difference, ReferenceType.ADJUSTMENT,
                source_system=SYSTEM_SOURCE, notes=notes, actor=actor,
            )
        return self.decrease(
            product, -difference, ReferenceType.ADJUSTMENT,
            source_system=SYSTEM_SOURCE, notes=notes, actor=actor,
        )

    def balance(self, product: Product) -> LedgerBalance:
        movements = self._movement_repo.list_by_product(product.id)  # type: ignore[arg-type]
        return LedgerBalance(
            product_id=product.id,  # type: ignore[arg-type]
            code=product.code,
            current_stock=product.current_stock,
            ledger_stock=sum(m.signed_quantity for m in movements),
            movement_count=len(movements),
        )

    # --- Internals ------------------------------------------------------------

    @staticmethod
    def _build(
        product: Product,
        movement_type: MovementType,
        quantity: int,
        reference_type: ReferenceType | None,
        reference_id: int | None,
        source_system: str | None,
        notes: str | None,
        actor: str | None,
    ) -> InventoryMovement:
        # Built before the stock changes so a malformed movement fails first.
        if product.id is None:
            raise ValidationError("Cannot post stock for an unsaved product")
        return InventoryMovement(
            id=None,
            product_id=product.id,
            movement_type=movement_type,
            quantity=quantity,
            reference_type=reference_type,
            reference_id=reference_id,
            source_system=source_system,
            notes=notes,
            created_by=actor,
        )

    def _post(self, product: Product, movement: InventoryMovement) -> InventoryMovement:
        self._product_repo.save(product)
        return self._movement_repo.add(movement)
