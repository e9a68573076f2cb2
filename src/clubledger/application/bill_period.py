"""Application service: Bill Period use case."""

from __future__ import annotations

import logging
from datetime import date

from clubledger.application.context import RequestContext
from clubledger.application.dto import PaymentDTO, payment_to_dto
from clubledger.domain.model.value_objects import BillingPeriod
from clubledger.domain.repository.unit_of_work import UnitOfWork
from clubledger.domain.service.period_billing_service import (
    DEFAULT_DUE_DAY,
    PeriodBillingService,
)
from clubledger.domain.service.pricing_resolver import PricingResolver

logger = logging.getLogger(__name__)


class BillPeriodHandler:

    def __init__(self, uow: UnitOfWork, due_day: int = DEFAULT_DUE_DAY) -> None:
        self._uow = uow
        self._due_day = due_day

    def handle(
        self,
        ctx: RequestContext,
        member_id: int,
        month: int,
        year: int,
        due_date: date | None = None,
        notes: str | None = None,
    ) -> PaymentDTO:
        """Create the dues payment of one member for one period."""
        period = BillingPeriod(year=year, month=month)

        with self._uow as uow:
            billing = PeriodBillingService(
                PricingResolver(uow.members, uow.categories),
                uow.payments,
                due_day=self._due_day,
            )
            payment = billing.bill(member_id, period, due_date=due_date, notes=notes)
            uow.commit()

        logger.info(
            "Billed %s to member #%s: payment #%s for %s (actor=%s)",
            period, member_id, payment.id, payment.amount_due, ctx,
        )
        return payment_to_dto(payment)
