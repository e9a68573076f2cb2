"""Application service: Bill All Active Members use case.

Bills one period to every active member inside a single transaction.
A member who already has a payment for the period is skipped and counted;
any other failure aborts and rolls back the whole batch.
"""

from __future__ import annotations

import logging
from datetime import date

from clubledger.application.context import RequestContext
from clubledger.application.dto import BulkBillingDTO
from clubledger.domain.exceptions import ConflictError
from clubledger.domain.model.value_objects import BillingPeriod
from clubledger.domain.repository.unit_of_work import UnitOfWork
from clubledger.domain.service.period_billing_service import (
    DEFAULT_DUE_DAY,
    PeriodBillingService,
)
from clubledger.domain.service.pricing_resolver import PricingResolver

logger = logging.getLogger(__name__)


class BillAllActiveHandler:

    def __init__(self, uow: UnitOfWork, due_day: int = DEFAULT_DUE_DAY) -> None:
        self._uow = uow
        self._due_day = due_day

    def handle(
        self,
        ctx: RequestContext,
        month: int,
        year: int,
        due_date: date | None = None,
    ) -> BulkBillingDTO:
        period = BillingPeriod(year=year, month=month)
        created = 0
        skipped = 0

        with self._uow as uow:
            billing = PeriodBillingService(
                PricingResolver(uow.members, uow.categories),
                uow.payments,
                due_day=self._due_day,
            )
            members = uow.members.list_active()

            for member in members:
                try:
                    billing.bill(member.id, period, due_date=due_date)
                except ConflictError:
                    logger.debug("Member #%s already billed for %s", member.id, period)
                    skipped += 1
                else:
                    created += 1

            uow.commit()

        logger.info(
            "Bulk billing %s: created=%d skipped=%d members=%d (actor=%s)",
            period, created, skipped, len(members), ctx,
        )
        return BulkBillingDTO(
            period=str(period),
            created=created,
            skipped=skipped,
            total_considered=len(members),
        )
