"""Application service: Delete Order use case.

A live order (anything but ``cancelado``) still holds stock, so it is
given back before the order and its items are removed.
"""

from __future__ import annotations

import logging

from clubledger.application.context import RequestContext
from clubledger.domain.exceptions import EntityNotFoundError
from clubledger.domain.repository.unit_of_work import UnitOfWork
from clubledger.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, ctx: RequestContext, order_id: int) -> None:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            if not order.is_cancelled:
                StockLedgerService(uow.products).restore_for_order(order)

            uow.orders.delete(order_id)
            uow.commit()

        logger.info(
            "Order #%s deleted (was %s) (actor=%s)", order_id, order.status.value, ctx
        )
