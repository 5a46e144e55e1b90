"""Abstract append-only store for inventory movements."""

from __future__ import annotations

from abc import ABC, abstractmethod

from procure.domain.model.movement import InventoryMovement


class MovementRepository(ABC):

    @abstractmethod
    def add(self, movement: InventoryMovement) -> InventoryMovement:
        """Append a movement and return it with its assigned ID.

        There is no update or delete: the ledger only grows.
        """

    @abstractmethod
    def list_by_product(self, product_id: int) -> list[InventoryMovement]:
        """Return one product's movements, oldest first."""

    @abstractmethod
    def list_all(self) -> list[InventoryMovement]:
        """Return every movement, oldest first."""
