"""Application service: Change Order Status use case.

Only ``cancelado`` carries stock side effects:

- entering it restores every item quantity, unconditionally;
- leaving it re-validates every item first and, only if all pass,
  debits them again.

Every other transition just records the new status.
"""

from __future__ import annotations

import logging

from clubledger.application.context import RequestContext
from clubledger.application.dto import StatusDTO
from clubledger.domain.exceptions import EntityNotFoundError, OutOfStockError
from clubledger.domain.model.order import OrderStatus
from clubledger.domain.repository.unit_of_work import UnitOfWork
from clubledger.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class ChangeOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, ctx: RequestContext, order_id: int, status: str) -> StatusDTO:
        new_status = OrderStatus.parse(status)

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            transition = order.change_status(new_status)
            svc = StockLedgerService(uow.products)

            if transition.enters_cancellation:
                svc.restore_for_order(order)
            elif transition.leaves_cancellation:
                try:
                    svc.debit_for_order(order)
                except OutOfStockError as exc:
                    raise OutOfStockError(f"Cannot reactivate order #{order_id}: {exc}") from exc

            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order #%s status %s -> %s (actor=%s)",
            order_id, transition.previous.value, transition.current.value, ctx,
        )
        return StatusDTO(id=order_id, status=new_status.value)
