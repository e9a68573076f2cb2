"""Application service: Remove Payment use case."""

from __future__ import annotations

import logging

from clubledger.application.context import RequestContext
from clubledger.domain.exceptions import EntityNotFoundError
from clubledger.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RemovePaymentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, ctx: RequestContext, payment_id: int) -> None:
        with self._uow as uow:
            if not uow.payments.delete(payment_id):
                raise EntityNotFoundError(f"Payment #{payment_id} not found")
            uow.commit()

        logger.info("Payment #%s removed (actor=%s)", payment_id, ctx)
