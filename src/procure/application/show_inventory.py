"""Application service: inventory queries.

Catalog lookups, stock alerts and a product's movement history.
"""

from __future__ import annotations

from procure.application.dto import MovementDTO, ProductDTO
from procure.application.mapping import movement_to_dto, product_to_dto
from procure.domain.exceptions import EntityKind, EntityNotFoundError
from procure.domain.model.product import Product
from procure.domain.repository.unit_of_work import UnitOfWork


class ShowInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def list_products(self, include_inactive: bool = False) -> list[ProductDTO]:
        return [
            product_to_dto(p)
            for p in self._products()
            if include_inactive or p.active
        ]

    def get_product(self, product_id: int) -> ProductDTO:
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(EntityKind.PRODUCT, product_id)
        return product_to_dto(product)

    def get_product_by_code(self, code: str) -> ProductDTO:
        with self._uow as uow:
            product = uow.products.get_by_code(code)
        if product is None:
            raise EntityNotFoundError(EntityKind.PRODUCT, code)
        return product_to_dto(product)

    # --- Alerts (active products only) ----------------------------------------

    def low_stock(self) -> list[ProductDTO]:
        return [product_to_dto(p) for p in self._products() if p.active and p.is_low_stock]

    def out_of_stock(self) -> list[ProductDTO]:
        return [product_to_dto(p) for p in self._products() if p.active and p.is_out_of_stock]

    def over_stock(self) -> list[ProductDTO]:
        return [product_to_dto(p) for p in self._products() if p.active and p.is_over_stock]

    # --- Ledger ---------------------------------------------------------------

    def movement_history(self, product_id: int) -> list[MovementDTO]:
        """Return the product's movements, newest first."""
        with self._uow as uow:
            if uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError(EntityKind.PRODUCT, product_id)
            movements = uow.movements.list_by_product(product_id)
        return [movement_to_dto(m) for m in reversed(movements)]

    def _products(self) -> list[Product]:
        with self._uow as uow:
            return uow.products.list_all()
