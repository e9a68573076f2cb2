"""Integration tests for the ChangeOrderStatus and DeleteOrder use cases."""

import pytest

from clubledger.application.change_order_status import ChangeOrderStatusHandler
from clubledger.application.context import SYSTEM
from clubledger.application.delete_order import DeleteOrderHandler
from clubledger.application.dto import OrderItemSpec
from clubledger.application.place_order import PlaceOrderHandler
from clubledger.domain.exceptions import EntityNotFoundError, OutOfStockError, ValidationError
from clubledger.domain.model.order import OrderStatus
from clubledger.domain.model.product import ProductStatus
from tests.fakes import FakeUnitOfWork, member, product


def _setup(stock: int = 5) -> FakeUnitOfWork:
    return FakeUnitOfWork(members=[member(1)], products=[product(1, stock=stock)])


def _place(uow: FakeUnitOfWork, qty: int) -> int:
    return PlaceOrderHandler(uow).handle(SYSTEM, 1, [OrderItemSpec(1, qty)]).id


def _stock(uow: FakeUnitOfWork) -> int:
    return uow.products.get_by_id(1).stock


class TestChangeOrderStatus:

    def test_plain_transition_keeps_stock(self):
        uow = _setup()
        order_id = _place(uow, 2)

        dto = ChangeOrderStatusHandler(uow).handle(SYSTEM, order_id, "pagado")

        assert dto.status == "pagado"
        assert uow.orders.get_by_id(order_id).status == OrderStatus.PAID
        assert _stock(uow) == 3

    def test_cancel_restores_stock(self):
        uow = _setup()
        first = _place(uow, 5)
        assert _stock(uow) == 0

        with pytest.raises(OutOfStockError):
            _place(uow, 1)

        ChangeOrderStatusHandler(uow).handle(SYSTEM, first, "cancelado")
        assert _stock(uow) == 5

    def test_cancel_twice_restores_once(self):
        uow = _setup()
        order_id = _place(uow, 2)
        handler = ChangeOrderStatusHandler(uow)

        handler.handle(SYSTEM, order_id, "cancelado")
        handler.handle(SYSTEM, order_id, "cancelado")

        assert _stock(uow) == 5

    def test_reactivation_debits_again(self):
        uow = _setup()
        order_id = _place(uow, 2)
        handler = ChangeOrderStatusHandler(uow)

        handler.handle(SYSTEM, order_id, "cancelado")
        handler.handle(SYSTEM, order_id, "entregado")

        assert _stock(uow) == 3
        assert uow.orders.get_by_id(order_id).status == OrderStatus.DELIVERED

    def test_reactivation_without_stock_fails_cleanly(self):
        uow = _setup()
        first = _place(uow, 3)
        handler = ChangeOrderStatusHandler(uow)
        handler.handle(SYSTEM, first, "cancelado")
        _place(uow, 4)
        assert _stock(uow) == 1

        with pytest.raises(OutOfStockError, match=f"Cannot reactivate order #{first}"):
            handler.handle(SYSTEM, first, "pendiente")

        assert _stock(uow) == 1
        assert uow.orders.get_by_id(first).status == OrderStatus.CANCELLED

    def test_reactivation_of_deactivated_product_fails(self):
        uow = _setup()
        order_id = _place(uow, 1)
        handler = ChangeOrderStatusHandler(uow)
        handler.handle(SYSTEM, order_id, "cancelado")
        uow.products.get_by_id(1).status = ProductStatus.INACTIVE

        with pytest.raises(OutOfStockError, match="no longer available"):
            handler.handle(SYSTEM, order_id, "pagado")
        assert _stock(uow) == 5

    def test_invalid_status(self):
        uow = _setup()
        order_id = _place(uow, 1)
        with pytest.raises(ValidationError, match="Invalid order status"):
            ChangeOrderStatusHandler(uow).handle(SYSTEM, order_id, "shipped")

    def test_unknown_order(self):
        with pytest.raises(EntityNotFoundError, match="Order #7 not found"):
            ChangeOrderStatusHandler(_setup()).handle(SYSTEM, 7, "pagado")


class TestDeleteOrder:

    def test_deleting_live_order_restores_stock(self):
        uow = _setup()
        order_id = _place(uow, 4)

        DeleteOrderHandler(uow).handle(SYSTEM, order_id)

        assert uow.orders.get_by_id(order_id) is None
        assert _stock(uow) == 5

    def test_deleting_cancelled_order_leaves_stock(self):
        uow = _setup()
        order_id = _place(uow, 4)
        ChangeOrderStatusHandler(uow).handle(SYSTEM, order_id, "cancelado")

        DeleteOrderHandler(uow).handle(SYSTEM, order_id)

        assert _stock(uow) == 5

    def test_unknown_order(self):
        with pytest.raises(EntityNotFoundError, match="Order #7 not found"):
            DeleteOrderHandler(_setup()).handle(SYSTEM, 7)
