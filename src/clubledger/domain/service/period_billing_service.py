"""Domain service: Period Billing.

Creates the Payment for one member and one period. The amount due is
resolved once, here, and frozen into the payment.
"""

from __future__ import annotations

from datetime import date

from clubledger.domain.model.payment import Payment
from clubledger.domain.model.value_objects import BillingPeriod
from clubledger.domain.repository.payment_repository import PaymentRepository
from clubledger.domain.service.pricing_resolver import PricingResolver

DEFAULT_DUE_DAY = 10


class PeriodBillingService:

    def __init__(
        self,
        pricing: PricingResolver,
        payment_repo: PaymentRepository,
        due_day: int = DEFAULT_DUE_DAY,
    ) -> None:
        self._pricing = pricing
        self._payment_repo = payment_repo
        self._due_day = due_day

    def bill(
        self,
        member_id: int,
        period: BillingPeriod,
        due_date: date | None = None,
        notes: str | None = None,
    ) -> Payment:
        """Bill *period* to a member.

        Raises EntityNotFoundError for an unknown member and ConflictError
        (from the repository) when the period was already billed.
        """
        amount = self._pricing.amount_due(member_id)
        payment = Payment.bill(
            member_id=member_id,
            period=period,
            amount_due=amount,
            due_date=due_date or period.default_due_date(self._due_day),
            notes=notes,
        )
        self._payment_repo.add(payment)
        return payment
