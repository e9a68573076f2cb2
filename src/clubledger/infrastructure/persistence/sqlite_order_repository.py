"""SQLite-backed implementation of OrderRepository."""

from __future__ import annotations

import sqlite3
from datetime import date, datetime
from decimal import Decimal

from clubledger.domain.exceptions import EntityNotFoundError
from clubledger.domain.model.order import Order, OrderLineItem, OrderStatus
from clubledger.domain.model.value_objects import Money, Quantity
from clubledger.domain.repository.order_repository import OrderRepository
from clubledger.infrastructure.persistence.sqlite_db import run


class SqliteOrderRepository(OrderRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = run(self._conn, "SELECT * FROM orders WHERE id = ?", (order_id,)).fetchone()
        if row is None:
            return None
        return self._to_domain(row, self._item_rows(order_id))

    def list_created_between(
        self, from_date: date | None = None, to_date: date | None = None
    ) -> list[Order]:
        # created_at is stored as an ISO-8601 UTC timestamp; its first ten
        # characters are the day.
        clauses: list[str] = []
        params: list[str] = []
        if from_date is not None:
            clauses.append("substr(created_at, 1, 10) >= ?")
            params.append(from_date.isoformat())
        if to_date is not None:
            clauses.append("substr(created_at, 1, 10) <= ?")
            params.append(to_date.isoformat())
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = run(
            self._conn, f"SELECT * FROM orders {where} ORDER BY id", tuple(params)
        ).fetchall()
        return [self._to_domain(row, self._item_rows(row["id"])) for row in rows]

    def add(self, order: Order) -> None:
        try:
            cur = run(
                self._conn,
                """
                INSERT INTO orders
                    (member_id, total, status, payment_method, notes, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order.member_id,
                    str(order.total.amount),
                    order.status.value,
                    order.payment_method,
                    order.notes,
                    order.created_at.isoformat(),
                    order.updated_at.isoformat() if order.updated_at else None,
                ),
            )
            order.id = cur.lastrowid
            for item in order.items:
                run(
                    self._conn,
                    """
                    INSERT INTO order_items
                        (order_id, product_id, quantity, unit_price, subtotal)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        order.id,
                        item.product_id,
                        item.quantity.value,
                        str(item.unit_price.amount),
                        str(item.subtotal.amount),
                    ),
                )
        except sqlite3.IntegrityError as exc:
            raise EntityNotFoundError(
                f"Order references a missing member or product: {exc}"
            ) from exc

    def save(self, order: Order) -> None:
        run(
            self._conn,
            "UPDATE orders SET status = ?, updated_at = ? WHERE id = ?",
            (
                order.status.value,
                order.updated_at.isoformat() if order.updated_at else None,
                order.id,
            ),
        )

    def delete(self, order_id: int) -> None:
        # Items follow through ON DELETE CASCADE.
        run(self._conn, "DELETE FROM orders WHERE id = ?", (order_id,))

    def _item_rows(self, order_id: int) -> list[sqlite3.Row]:
        return run(
            self._conn,
            """
            SELECT oi.*, p.name AS product_name
              FROM order_items oi
              JOIN products p ON p.id = oi.product_id
             WHERE oi.order_id = ?
             ORDER BY oi.id
            """,
            (order_id,),
        ).fetchall()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: sqlite3.Row, item_rows: list[sqlite3.Row]) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"])),
            )
            for i in item_rows
        ]
        return Order(
            id=row["id"],
            member_id=row["member_id"],
            items=items,
            total=Money(Decimal(row["total"])),
            status=OrderStatus(row["status"]),
            payment_method=row["payment_method"],
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]) if row["updated_at"] else None,
        )
