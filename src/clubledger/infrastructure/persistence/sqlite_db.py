"""SQLite helpers: schema, connections and error translation.

The schema carries the store-side guarantees the ledger relies on:
one payment per member and period, stock that can never go negative,
and order items that disappear with their order.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from clubledger.domain.exceptions import StoreUnavailableError

SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    amount_member TEXT NOT NULL,
    amount_non_member TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS members (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    category_id INTEGER NOT NULL REFERENCES categories(id),
    is_member INTEGER NOT NULL DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'activo' CHECK (status IN ('activo', 'inactivo'))
);

CREATE TABLE IF NOT EXISTS payments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    member_id INTEGER NOT NULL REFERENCES members(id),
    period_month INTEGER NOT NULL CHECK (period_month BETWEEN 1 AND 12),
    period_year INTEGER NOT NULL,
    amount_due TEXT NOT NULL,
    amount_paid TEXT NOT NULL DEFAULT '0',
    balance TEXT NOT NULL,
    payment_type TEXT NOT NULL DEFAULT 'sin_pago',
    status TEXT NOT NULL DEFAULT 'pendiente'
        CHECK (status IN ('pendiente', 'parcial', 'pagado', 'vencido')),
    payment_method TEXT,
    payment_date TEXT,
    due_date TEXT NOT NULL,
    notes TEXT,
    created_at TEXT NOT NULL,
    UNIQUE (member_id, period_month, period_year)
);

CREATE TABLE IF NOT EXISTS products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    price TEXT NOT NULL,
    stock INTEGER NOT NULL DEFAULT 0 CHECK (stock >= 0),
    members_only INTEGER NOT NULL DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'disponible' CHECK (status IN ('disponible', 'inactivo'))
);

CREATE TABLE IF NOT EXISTS orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    member_id INTEGER NOT NULL REFERENCES members(id),
    total TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'pendiente'
        CHECK (status IN ('pendiente', 'pagado', 'entregado', 'cancelado')),
    payment_method TEXT,
    notes TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT
);

CREATE TABLE IF NOT EXISTS order_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    order_id INTEGER NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
    product_id INTEGER NOT NULL REFERENCES products(id),
    quantity INTEGER NOT NULL CHECK (quantity > 0),
    unit_price TEXT NOT NULL,
    subtotal TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_payments_member_status ON payments (member_id, status);
CREATE INDEX IF NOT EXISTS idx_order_items_order ON order_items (order_id);
"""


def connect(db_path: Path, timeout: float = 5.0) -> sqlite3.Connection:
    """Open a connection in manual-transaction mode with foreign keys on."""
    try:
        conn = sqlite3.connect(db_path, timeout=timeout, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as exc:
        raise StoreUnavailableError(f"Cannot open database {db_path}: {exc}") from exc
    return conn


def init_schema(db_path: Path) -> None:
    """Create every table and index that does not exist yet."""
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StoreUnavailableError(f"Cannot create {db_path.parent}: {exc}") from exc
    conn = connect(db_path)
    try:
        conn.executescript(SCHEMA)
    except sqlite3.Error as exc:
        raise StoreUnavailableError(f"Cannot create schema: {exc}") from exc
    finally:
        conn.close()


def run(conn: sqlite3.Connection, sql: str, params: tuple = ()) -> sqlite3.Cursor:
    """Execute one statement.

    Constraint violations are re-raised untouched so repositories can map
    them to domain errors; every other failure becomes StoreUnavailableError.
    """
    try:
        return conn.execute(sql, params)
    except sqlite3.IntegrityError:
        raise
    except sqlite3.Error as exc:
        raise StoreUnavailableError(f"Store operation failed: {exc}") from exc
