"""SQLite-backed implementation of PaymentRepository."""

from __future__ import annotations

import sqlite3
from datetime import date, datetime
from decimal import Decimal

from clubledger.domain.exceptions import ConflictError, EntityNotFoundError
from clubledger.domain.model.payment import (
    UNSETTLED_STATUSES,
    Payment,
    PaymentStatus,
    PaymentType,
)
from clubledger.domain.model.value_objects import BillingPeriod, Money
from clubledger.domain.repository.payment_repository import PaymentRepository
from clubledger.infrastructure.persistence.sqlite_db import run


class SqlitePaymentRepository(PaymentRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- PaymentRepository interface ------------------------------------------

    def get_by_id(self, payment_id: int) -> Payment | None:
        row = run(self._conn, "SELECT * FROM payments WHERE id = ?", (payment_id,)).fetchone()
        return self._to_domain(row) if row else None

    def add(self, payment: Payment) -> None:
        try:
            cur = run(
                self._conn,
                """
                INSERT INTO payments
                    (member_id, period_month, period_year, amount_due, amount_paid,
                     balance, payment_type, status, payment_method, payment_date,
                     due_date, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payment.member_id,
                    payment.period.month,
                    payment.period.year,
                    *self._to_row(payment),
                    payment.created_at.isoformat(),
                ),
            )
        except sqlite3.IntegrityError as exc:
            if "UNIQUE" in str(exc):
                raise ConflictError(
                    f"Member #{payment.member_id} already has a payment "
                    f"for period {payment.period}"
                ) from exc
            raise EntityNotFoundError(f"Member #{payment.member_id} not found") from exc
        payment.id = cur.lastrowid

    def save(self, payment: Payment) -> None:
        run(
            self._conn,
            """
            UPDATE payments
               SET amount_due = ?, amount_paid = ?, balance = ?, payment_type = ?,
                   status = ?, payment_method = ?, payment_date = ?, due_date = ?,
                   notes = ?
             WHERE id = ?
            """,
            (*self._to_row(payment), payment.id),
        )

    def delete(self, payment_id: int) -> bool:
        cur = run(self._conn, "DELETE FROM payments WHERE id = ?", (payment_id,))
        return cur.rowcount > 0

    def list_unsettled(self, member_id: int | None = None) -> list[Payment]:
        placeholders = ", ".join("?" for _ in UNSETTLED_STATUSES)
        params: tuple = tuple(s.value for s in UNSETTLED_STATUSES)
        member_filter = ""
        if member_id is not None:
            member_filter = "AND member_id = ?"
            params += (member_id,)
        rows = run(
            self._conn,
            f"""
            SELECT * FROM payments
             WHERE status IN ({placeholders}) {member_filter}
             ORDER BY period_year, period_month, id
            """,
            params,
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    def list_for_period(self, period: BillingPeriod) -> list[Payment]:
        rows = run(
            self._conn,
            "SELECT * FROM payments WHERE period_month = ? AND period_year = ? ORDER BY id",
            (period.month, period.year),
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(payment: Payment) -> tuple:
        """Mutable columns, in the order used by INSERT and UPDATE."""
        return (
            str(payment.amount_due.amount),
            str(payment.amount_paid.amount),
            str(payment.balance.amount),
            payment.payment_type.value,
            payment.status.value,
            payment.payment_method,
            payment.payment_date.isoformat() if payment.payment_date else None,
            payment.due_date.isoformat(),
            payment.notes,
        )

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Payment:
        return Payment(
            id=row["id"],
            member_id=row["member_id"],
            period=BillingPeriod(year=row["period_year"], month=row["period_month"]),
            amount_due=Money(Decimal(row["amount_due"])),
            amount_paid=Money(Decimal(row["amount_paid"])),
            payment_type=PaymentType(row["payment_type"]),
            status=PaymentStatus(row["status"]),
            payment_method=row["payment_method"],
            payment_date=date.fromisoformat(row["payment_date"]) if row["payment_date"] else None,
            due_date=date.fromisoformat(row["due_date"]),
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
