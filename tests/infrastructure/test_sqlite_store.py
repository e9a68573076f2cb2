"""Tests for the SQLite repositories and unit of work against a real file."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from clubledger.application.change_order_status import ChangeOrderStatusHandler
from clubledger.application.context import SYSTEM
from clubledger.application.dto import OrderItemSpec
from clubledger.application.place_order import PlaceOrderHandler
from clubledger.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    OutOfStockError,
    StoreUnavailableError,
)
from clubledger.domain.model.member import MemberStatus
from clubledger.domain.model.order import Order, OrderLineItem, OrderStatus
from clubledger.domain.model.payment import Payment, PaymentStatus, PaymentType
from clubledger.domain.model.product import StockAdjustment, StockOperation
from clubledger.domain.model.value_objects import BillingPeriod, Money, Quantity
from clubledger.infrastructure.persistence.sqlite_db import init_schema
from clubledger.infrastructure.persistence.sqlite_unit_of_work import SqliteUnitOfWork
from tests.infrastructure.seed import query


def _bill(member_id: int, month: int, amount: str = "1000") -> Payment:
    period = BillingPeriod(year=2025, month=month)
    return Payment.bill(member_id, period, Money.of(amount), period.default_due_date())


class TestSchema:

    def test_init_is_idempotent(self, db_path):
        init_schema(db_path)
        assert query(db_path, "SELECT COUNT(*) FROM members") == [(3,)]

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "club.db"
        init_schema(path)
        assert path.exists()

    def test_parent_that_is_a_file_is_unavailable(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(StoreUnavailableError, match="Cannot create"):
            init_schema(blocker / "sub" / "club.db")


class TestMembers:

    def test_read_member_and_category(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            member = uow.members.get_by_id(1)
            category = uow.categories.get_by_id(member.category_id)

        assert member.full_name == "Ana Socia"
        assert member.is_member
        assert category.amount_non_member == Money.of("1500")

    def test_list_active_skips_inactive(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            active = uow.members.list_active()
        assert [m.id for m in active] == [1, 2]
        assert all(m.status == MemberStatus.ACTIVE for m in active)


class TestPayments:

    def test_round_trip(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            payment = _bill(1, 3, "1000.50")
            uow.payments.add(payment)
            payment.apply(Money.of("600"), today=date(2025, 3, 5), method="cash")
            uow.payments.save(payment)
            uow.commit()

        with SqliteUnitOfWork(db_path) as uow:
            stored = uow.payments.get_by_id(payment.id)

        assert stored.period == BillingPeriod(2025, 3)
        assert stored.amount_due == Money(Decimal("1000.50"))
        assert stored.amount_paid == Money.of("600")
        assert stored.payment_type == PaymentType.MINIMUM
        assert stored.status == PaymentStatus.PARTIAL
        assert stored.payment_method == "cash"
        assert stored.payment_date == date(2025, 3, 5)
        assert stored.due_date == date(2025, 3, 10)

    def test_balance_column_is_kept_in_sync(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            payment = _bill(1, 3)
            uow.payments.add(payment)
            payment.apply(Money.of("250"), today=date(2025, 3, 5))
            uow.payments.save(payment)
            uow.commit()

        assert query(db_path, "SELECT balance FROM payments") == [("750",)]

    def test_duplicate_period_conflicts(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            uow.payments.add(_bill(1, 3))
            with pytest.raises(ConflictError, match="already has a payment for period 03/2025"):
                uow.payments.add(_bill(1, 3, "2000"))
            # The failed statement does not abort the transaction.
            uow.payments.add(_bill(2, 3))
            uow.commit()

        assert query(db_path, "SELECT member_id FROM payments ORDER BY member_id") == [(1,), (2,)]

    def test_missing_member_is_not_found(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            with pytest.raises(EntityNotFoundError, match="Member #99 not found"):
                uow.payments.add(_bill(99, 3))

    def test_list_unsettled_oldest_first(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            for month in (4, 1, 3):
                uow.payments.add(_bill(1, month))
            paid = _bill(2, 2)
            uow.payments.add(paid)
            paid.override_status(PaymentStatus.PAID)
            uow.payments.save(paid)
            uow.commit()

        with SqliteUnitOfWork(db_path) as uow:
            unsettled = uow.payments.list_unsettled()
            for_member = uow.payments.list_unsettled(member_id=2)

        assert [str(p.period) for p in unsettled] == ["01/2025", "03/2025", "04/2025"]
        assert for_member == []

    def test_delete(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            payment = _bill(1, 3)
            uow.payments.add(payment)
            uow.commit()

        with SqliteUnitOfWork(db_path) as uow:
            assert uow.payments.delete(payment.id)
            assert not uow.payments.delete(payment.id)
            uow.commit()


class TestProducts:

    def test_adjust_stock_is_relative(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            uow.products.adjust_stock(1, -2)
            uow.products.adjust_stock(1, 1)
            uow.commit()

        assert query(db_path, "SELECT stock FROM products WHERE id = 1") == [(4,)]

    def test_overdraw_is_rejected_by_store(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            with pytest.raises(OutOfStockError, match="product #1"):
                uow.products.adjust_stock(1, -6)
            uow.commit()

        assert query(db_path, "SELECT stock FROM products WHERE id = 1") == [(5,)]

    def test_unknown_product(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            with pytest.raises(EntityNotFoundError, match="Product #42 not found"):
                uow.products.adjust_stock(42, 1)

    @pytest.mark.parametrize(
        ("operation", "quantity", "expected"),
        [
            (StockOperation.ADD, 4, 9),
            (StockOperation.SUBTRACT, 2, 3),
            (StockOperation.SUBTRACT, 8, 0),
            (StockOperation.SET, 0, 0),
            (StockOperation.SET, 12, 12),
        ],
    )
    def test_apply_adjustment(self, db_path, operation, quantity, expected):
        with SqliteUnitOfWork(db_path) as uow:
            assert uow.products.apply_adjustment(1, StockAdjustment(operation, quantity)) == expected
            uow.commit()

        assert query(db_path, "SELECT stock FROM products WHERE id = 1") == [(expected,)]

    def test_apply_adjustment_to_unknown_product(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            with pytest.raises(EntityNotFoundError, match="Product #42 not found"):
                uow.products.apply_adjustment(42, StockAdjustment(StockOperation.ADD, 1))


class TestOrders:

    def _order(self) -> Order:
        return Order.place(1, [
            OrderLineItem(1, "Camiseta", Quantity(2), Money.of("100")),
            OrderLineItem(2, "Carnet", Quantity(1), Money.of("50")),
        ], payment_method="cash")

    def test_round_trip(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            order = self._order()
            uow.orders.add(order)
            uow.commit()

        with SqliteUnitOfWork(db_path) as uow:
            stored = uow.orders.get_by_id(order.id)

        assert stored.total == Money.of("250")
        assert stored.status == OrderStatus.PENDING
        assert stored.payment_method == "cash"
        assert [(i.product_name, i.quantity.value) for i in stored.items] == [
            ("Camiseta", 2),
            ("Carnet", 1),
        ]

    def test_status_update(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            order = self._order()
            uow.orders.add(order)
            order.change_status(OrderStatus.DELIVERED)
            uow.orders.save(order)
            uow.commit()

        with SqliteUnitOfWork(db_path) as uow:
            stored = uow.orders.get_by_id(order.id)
        assert stored.status == OrderStatus.DELIVERED
        assert stored.updated_at is not None

    def test_delete_cascades_to_items(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            order = self._order()
            uow.orders.add(order)
            uow.commit()

        with SqliteUnitOfWork(db_path) as uow:
            uow.orders.delete(order.id)
            uow.commit()

        assert query(db_path, "SELECT COUNT(*) FROM order_items") == [(0,)]

    def test_list_created_between(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            for day in (1, 2, 3):
                order = self._order()
                order.created_at = datetime(2025, 3, day, 23, 59, tzinfo=timezone.utc)
                uow.orders.add(order)
            uow.commit()

        with SqliteUnitOfWork(db_path) as uow:
            everything = uow.orders.list_created_between()
            middle = uow.orders.list_created_between(date(2025, 3, 2), date(2025, 3, 2))
            since = uow.orders.list_created_between(from_date=date(2025, 3, 2))
            until = uow.orders.list_created_between(to_date=date(2025, 3, 1))

        assert [o.id for o in everything] == [1, 2, 3]
        assert [o.id for o in middle] == [2]
        assert [o.id for o in since] == [2, 3]
        assert [o.id for o in until] == [1]
        assert [i.product_name for i in middle[0].items] == ["Camiseta", "Carnet"]


class TestUnitOfWork:

    def test_leaving_without_commit_discards(self, db_path):
        with SqliteUnitOfWork(db_path) as uow:
            uow.payments.add(_bill(1, 3))

        assert query(db_path, "SELECT COUNT(*) FROM payments") == [(0,)]

    def test_exception_rolls_back(self, db_path):
        with pytest.raises(RuntimeError):
            with SqliteUnitOfWork(db_path) as uow:
                uow.products.adjust_stock(1, -3)
                raise RuntimeError("boom")

        assert query(db_path, "SELECT stock FROM products WHERE id = 1") == [(5,)]

    def test_failed_order_leaves_no_trace(self, db_path):
        handler = PlaceOrderHandler(SqliteUnitOfWork(db_path))
        with pytest.raises(OutOfStockError):
            handler.handle(SYSTEM, 1, [OrderItemSpec(2, 3), OrderItemSpec(1, 9)])

        assert query(db_path, "SELECT COUNT(*) FROM orders") == [(0,)]
        assert query(db_path, "SELECT stock FROM products ORDER BY id") == [(5,), (10,), (3,)]

    def test_cancel_and_reorder_cycle(self, db_path):
        place = PlaceOrderHandler(SqliteUnitOfWork(db_path))
        change = ChangeOrderStatusHandler(SqliteUnitOfWork(db_path))

        first = place.handle(SYSTEM, 1, [OrderItemSpec(1, 5)])
        with pytest.raises(OutOfStockError):
            place.handle(SYSTEM, 1, [OrderItemSpec(1, 1)])

        change.handle(SYSTEM, first.id, "cancelado")
        assert query(db_path, "SELECT stock FROM products WHERE id = 1") == [(5,)]

        place.handle(SYSTEM, 1, [OrderItemSpec(1, 5)])
        with pytest.raises(OutOfStockError, match=f"Cannot reactivate order #{first.id}"):
            change.handle(SYSTEM, first.id, "pendiente")
        assert query(db_path, "SELECT stock FROM products WHERE id = 1") == [(0,)]
