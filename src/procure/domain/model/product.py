"""Product aggregate.

Products live independently of orders. Catalog details (name, price,
stock thresholds) may be edited freely; ``current_stock`` may not. It
moves only through the StockLedger, which pairs every change with an
InventoryMovement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from procure.domain.exceptions import InsufficientStockError, ValidationError
from procure.domain.model.value_objects import Money

MAX_CODE_LENGTH = 50
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``current_stock`` is never negative
    - ``min_stock`` and ``max_stock`` (when set) are never negative
    """

    id: int | None
    code: str
    name: str
    unit_price: Money
    current_stock: int = 0
    min_stock: int = 0
    max_stock: int | None = None
    description: str | None = None
    active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        code: str,
        name: str,
        unit_price: Money,
        min_stock: int = 0,
        max_stock: int | None = None,
        description: str | None = None,
    ) -> Product:
        """Create a new catalog entry with zero stock.

        Initial stock, if any, is posted afterwards through the ledger so
        that it shows up as a movement.
        """
        if not code or not code.strip():
            raise ValidationError("Product code is required")
        if len(code.strip()) > MAX_CODE_LENGTH:
            raise ValidationError(
                f"Product code must be at most {MAX_CODE_LENGTH} characters"
            )
        product = Product(id=None, code=code.strip(), name="", unit_price=Money.zero())
        product.update_details(
            name=name,
            unit_price=unit_price,
            min_stock=min_stock,
            max_stock=max_stock,
            description=description,
        )
        return product

    # --- Catalog edits --------------------------------------------------------

    def update_details(
        self,
        name: str,
        unit_price: Money,
        min_stock: int,
        max_stock: int | None,
        description: str | None = None,
    ) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Product name must be at most {MAX_NAME_LENGTH} characters"
            )
        if description is not None and len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
            )
        if not unit_price.is_positive:
            raise ValidationError("Product price must be greater than zero")
        if min_stock < 0:
            raise ValidationError("Minimum stock cannot be negative")
        if max_stock is not None and max_stock < 0:
            raise ValidationError("Maximum stock cannot be negative")

        self.name = name.strip()
        self.unit_price = unit_price
        self.min_stock = min_stock
        self.max_stock = max_stock
        self.description = description
        self.updated_at = _utcnow()

    def deactivate(self) -> None:
        """Soft delete: products are never physically removed."""
        if not self.active:
            raise ValidationError(f"Product {self.code} is already inactive")
        self.active = False
        self.updated_at = _utcnow()

    # --- Stock (StockLedger only) ---------------------------------------------

    def post_inbound(self, quantity: int) -> None:
        """Add *quantity* units. Called by StockLedger only."""
        if quantity <= 0:
            raise ValidationError("Stock increase quantity must be positive")
        self.current_stock += quantity
        self.updated_at = _utcnow()

    def post_outbound(self, quantity: int) -> None:
        """Remove *quantity* units. Called by StockLedger only.

        The availability check and the subtraction happen together so a
        rejected call leaves the product untouched.
        """
        if quantity <= 0:
            raise ValidationError("Stock decrease quantity must be positive")
        if not self.has_available_stock(quantity):
            raise InsufficientStockError(
                product_id=self.id,
                code=self.code,
                available=self.current_stock,
                requested=quantity,
            )
        self.current_stock -= quantity
        self.updated_at = _utcnow()

    # --- Computed properties --------------------------------------------------

    def has_available_stock(self, quantity: int) -> bool:
        return self.current_stock >= quantity

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock

    @property
    def is_out_of_stock(self) -> bool:
        return self.current_stock == 0

    @property
    def is_over_stock(self) -> bool:
        return self.max_stock is not None and self.current_stock > self.max_stock
