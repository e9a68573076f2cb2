"""Application service: Adjust Stock use case.

Administrative restock outside the order lifecycle. Adjustments are
applied by the store relative to the current value, except ``set``.
"""

from __future__ import annotations

import logging

from clubledger.application.context import RequestContext
from clubledger.application.dto import StockDTO
from clubledger.domain.exceptions import EntityNotFoundError
from clubledger.domain.model.product import StockAdjustment, StockOperation
from clubledger.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AdjustStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        ctx: RequestContext,
        product_id: int,
        quantity: int,
        operation: str = StockOperation.SET.value,
    ) -> StockDTO:
        adjustment = StockAdjustment(StockOperation.parse(operation), quantity)

        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")

            previous = product.stock
            stock = uow.products.apply_adjustment(product_id, adjustment)
            uow.commit()

        logger.info(
            "Stock of product #%s: %s %d, %d -> %d (actor=%s)",
            product_id, adjustment.operation.value, quantity, previous, stock, ctx,
        )
        return StockDTO(id=product_id, name=product.name, stock=stock)
