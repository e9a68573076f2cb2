"""SQLite-backed implementations of the membership repositories."""

from __future__ import annotations

import sqlite3
from decimal import Decimal

from clubledger.domain.model.member import Category, Member, MemberStatus
from clubledger.domain.model.value_objects import Money
from clubledger.domain.repository.member_repository import (
    CategoryRepository,
    MemberRepository,
)
from clubledger.infrastructure.persistence.sqlite_db import run


class SqliteMemberRepository(MemberRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get_by_id(self, member_id: int) -> Member | None:
        row = run(self._conn, "SELECT * FROM members WHERE id = ?", (member_id,)).fetchone()
        return self._to_domain(row) if row else None

    def list_active(self) -> list[Member]:
        rows = run(
            self._conn,
            "SELECT * FROM members WHERE status = ? ORDER BY id",
            (MemberStatus.ACTIVE.value,),
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Member:
        return Member(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            category_id=row["category_id"],
            is_member=bool(row["is_member"]),
            status=MemberStatus(row["status"]),
        )


class SqliteCategoryRepository(CategoryRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get_by_id(self, category_id: int) -> Category | None:
        row = run(
            self._conn, "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        if row is None:
            return None
        return Category(
            id=row["id"],
            name=row["name"],
            amount_member=Money(Decimal(row["amount_member"])),
            amount_non_member=Money(Decimal(row["amount_non_member"])),
        )
