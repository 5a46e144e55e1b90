"""Abstract repository for order lines.

Lines are stored flat and keyed by their own ID. The owning order is
found through ``order_id``, never through an object reference.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from procure.domain.model.order_detail import OrderDetail


class OrderDetailRepository(ABC):

    @abstractmethod
    def get_by_id(self, detail_id: int) -> OrderDetail | None:
        """Return a line by its ID, or None if not found."""

    @abstractmethod
    def list_by_order(self, order_id: int) -> list[OrderDetail]:
        """Return the lines of one order in the order they were added."""

    @abstractmethod
    def save(self, detail: OrderDetail) -> None:
        """Persist a new or updated line. Assigns an ID to new lines."""
