"""SQLite-backed unit of work: one connection, one transaction."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from clubledger.domain.exceptions import StoreUnavailableError
from clubledger.domain.repository.unit_of_work import UnitOfWork
from clubledger.infrastructure.persistence.sqlite_db import connect, run
from clubledger.infrastructure.persistence.sqlite_member_repository import (
    SqliteCategoryRepository,
    SqliteMemberRepository,
)
from clubledger.infrastructure.persistence.sqlite_order_repository import (
    SqliteOrderRepository,
)
from clubledger.infrastructure.persistence.sqlite_payment_repository import (
    SqlitePaymentRepository,
)
from clubledger.infrastructure.persistence.sqlite_product_repository import (
    SqliteProductRepository,
)


class SqliteUnitOfWork(UnitOfWork):

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _begin(self) -> None:
        self._conn = connect(self._db_path)
        # Take the write lock up front so checks and writes see the same data.
        try:
            run(self._conn, "BEGIN IMMEDIATE")
        except StoreUnavailableError:
            self._end()
            raise
        self.members = SqliteMemberRepository(self._conn)
        self.categories = SqliteCategoryRepository(self._conn)
        self.payments = SqlitePaymentRepository(self._conn)
        self.products = SqliteProductRepository(self._conn)
        self.orders = SqliteOrderRepository(self._conn)

    def _end(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def commit(self) -> None:
        try:
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"Commit failed: {exc}") from exc

    def rollback(self) -> None:
        if self._conn is None or not self._conn.in_transaction:
            return
        try:
            self._conn.rollback()
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"Rollback failed: {exc}") from exc
