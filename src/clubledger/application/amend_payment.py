"""Application service: Amend Payment use case.

Administrative correction of a payment's amounts, dates or annotations.
Only the fields present in the amendment change; type, status and balance
are then re-derived from the resulting values.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from decimal import Decimal

from clubledger.application.context import RequestContext
from clubledger.application.dto import PaymentDTO, payment_to_dto
from clubledger.domain.exceptions import EntityNotFoundError
from clubledger.domain.model.payment import DEFAULT_MINIMUM_RATIO, PaymentAmendment
from clubledger.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AmendPaymentHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        minimum_ratio: Decimal = DEFAULT_MINIMUM_RATIO,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._uow = uow
        self._minimum_ratio = minimum_ratio
        self._clock = clock

    def handle(
        self,
        ctx: RequestContext,
        payment_id: int,
        amendment: PaymentAmendment,
    ) -> PaymentDTO:
        with self._uow as uow:
            payment = uow.payments.get_by_id(payment_id)
            if payment is None:
                raise EntityNotFoundError(f"Payment #{payment_id} not found")

            payment.amend(amendment, today=self._clock(), minimum_ratio=self._minimum_ratio)
            uow.payments.save(payment)
            uow.commit()

        logger.info("Payment #%s amended: %r (actor=%s)", payment_id, amendment, ctx)
        return payment_to_dto(payment)
