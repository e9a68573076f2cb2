"""Application service: Set Payment Status use case (manual override)."""

from __future__ import annotations

import logging

from clubledger.application.context import RequestContext
from clubledger.application.dto import StatusDTO
from clubledger.domain.exceptions import EntityNotFoundError
from clubledger.domain.model.payment import PaymentStatus
from clubledger.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SetPaymentStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, ctx: RequestContext, payment_id: int, status: str) -> StatusDTO:
        """Force a payment's status. Amounts are not recomputed."""
        new_status = PaymentStatus.parse(status)

        with self._uow as uow:
            payment = uow.payments.get_by_id(payment_id)
            if payment is None:
                raise EntityNotFoundError(f"Payment #{payment_id} not found")

            previous = payment.status
            payment.override_status(new_status)
            uow.payments.save(payment)
            uow.commit()

        logger.info(
            "Payment #%s status overridden %s -> %s (actor=%s)",
            payment_id, previous.value, new_status.value, ctx,
        )
        return StatusDTO(id=payment_id, status=new_status.value)
