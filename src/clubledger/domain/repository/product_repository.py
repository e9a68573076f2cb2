"""Abstract repository for Product stock.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQLite, in-memory)
live in the infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from clubledger.domain.model.product import Product, StockAdjustment


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def adjust_stock(self, product_id: int, delta: int) -> None:
        """Apply a relative stock change (``stock = stock + delta``).

        The store evaluates the change atomically per row. Raises
        OutOfStockError if it would leave the stock negative.
        """

    @abstractmethod
    def apply_adjustment(self, product_id: int, adjustment: StockAdjustment) -> int:
        """Apply an administrative restock and return the resulting stock.

        Raises EntityNotFoundError for an unknown product.
        """
