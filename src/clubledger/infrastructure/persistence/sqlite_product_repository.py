"""SQLite-backed implementation of ProductRepository."""

from __future__ import annotations

import sqlite3
from decimal import Decimal

from clubledger.domain.exceptions import EntityNotFoundError, OutOfStockError
from clubledger.domain.model.product import (
    Product,
    ProductStatus,
    StockAdjustment,
    StockOperation,
)
from clubledger.domain.model.value_objects import Money
from clubledger.domain.repository.product_repository import ProductRepository
from clubledger.infrastructure.persistence.sqlite_db import run

# Right-hand side of the stock assignment per operation; the store never
# lets a subtraction go below zero.
_ADJUSTMENT_SQL = {
    StockOperation.ADD: "stock + ?",
    StockOperation.SUBTRACT: "MAX(stock - ?, 0)",
    StockOperation.SET: "?",
}


class SqliteProductRepository(ProductRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get_by_id(self, product_id: int) -> Product | None:
        row = run(self._conn, "SELECT * FROM products WHERE id = ?", (product_id,)).fetchone()
        if row is None:
            return None
        return Product(
            id=row["id"],
            name=row["name"],
            price=Money(Decimal(row["price"])),
            stock=row["stock"],
            members_only=bool(row["members_only"]),
            status=ProductStatus(row["status"]),
        )

    def adjust_stock(self, product_id: int, delta: int) -> None:
        # Relative update: the store computes the new value under its own
        # row lock, and CHECK (stock >= 0) rejects an overdraw.
        try:
            cur = run(
                self._conn,
                "UPDATE products SET stock = stock + ? WHERE id = ?",
                (delta, product_id),
            )
        except sqlite3.IntegrityError as exc:
            raise OutOfStockError(
                f"Insufficient stock for product #{product_id} (need {-delta})"
            ) from exc
        if cur.rowcount == 0:
            raise EntityNotFoundError(f"Product #{product_id} not found")

    def apply_adjustment(self, product_id: int, adjustment: StockAdjustment) -> int:
        cur = run(
            self._conn,
            f"UPDATE products SET stock = {_ADJUSTMENT_SQL[adjustment.operation]} WHERE id = ?",
            (adjustment.quantity, product_id),
        )
        if cur.rowcount == 0:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        row = run(self._conn, "SELECT stock FROM products WHERE id = ?", (product_id,)).fetchone()
        return row["stock"]
