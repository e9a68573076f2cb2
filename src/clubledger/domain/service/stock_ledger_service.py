"""Domain service: Stock Ledger.

Coordinates the cross-aggregate effect of an order on product stock.
Debits happen when an order is placed or leaves ``cancelado``; restores
happen when it enters ``cancelado`` or is deleted while still live.

Debits use a validate-then-mutate approach so a product failing the check
never leaves other products already debited. Every change is issued as a
relative adjustment evaluated by the store.
"""

from __future__ import annotations

from clubledger.domain.exceptions import OutOfStockError
from clubledger.domain.model.order import Order
from clubledger.domain.repository.product_repository import ProductRepository


class StockLedgerService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def ensure_available(self, order: Order) -> None:
        """Check every product of the order can supply its total quantity.

        A product that disappeared or was deactivated supplies nothing.
        Raises OutOfStockError before any stock has been touched.
        """
        for product_id, qty in order.quantities_by_product().items():
            product = self._product_repo.get_by_id(product_id)
            if product is None or not product.is_available:
                raise OutOfStockError(
                    f"Product #{product_id} is no longer available (need {qty})"
                )
            product.ensure_can_supply(qty)

    def debit_for_order(self, order: Order) -> None:
        """Debit stock for every line of the order.

        Phase 1 validates all products; phase 2 applies the relative
        decrements. The store's non-negative guard still applies, so a
        concurrent debit that wins the race surfaces as OutOfStockError.
        """
        self.ensure_available(order)

        for product_id, qty in order.quantities_by_product().items():
            self._product_repo.adjust_stock(product_id, -qty)

    def restore_for_order(self, order: Order) -> None:
        """Give back every quantity of the order. Never needs validation."""
        for product_id, qty in order.quantities_by_product().items():
            self._product_repo.adjust_stock(product_id, qty)
