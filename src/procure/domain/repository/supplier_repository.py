"""Abstract repository for the Supplier aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from procure.domain.model.supplier import Supplier


class SupplierRepository(ABC):

    @abstractmethod
    def get_by_id(self, supplier_id: int) -> Supplier | None:
        """Return a supplier by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Supplier]:
        """Return every supplier ordered by ID."""

    @abstractmethod
    def save(self, supplier: Supplier) -> None:
        """Persist a new or updated supplier. Assigns an ID to new suppliers."""
