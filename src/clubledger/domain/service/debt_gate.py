"""Domain service: Debt Gate.

Decides whether a member may buy based on how many periods remain
unsettled. Only the count of debt months matters, not their size: many
small overdue periods block a member before one large one does.
"""

from __future__ import annotations

from dataclasses import dataclass

from clubledger.domain.model.payment import Payment
from clubledger.domain.model.value_objects import Money
from clubledger.domain.repository.payment_repository import PaymentRepository

DEFAULT_MAX_DEBT_MONTHS = 2


@dataclass(frozen=True)
class DebtAssessment:
    pending_payments: list[Payment]
    max_debt_months: int

    @property
    def pending_months(self) -> int:
        return len(self.pending_payments)

    @property
    def total_debt(self) -> Money:
        total = Money.zero()
        for payment in self.pending_payments:
            total = total + payment.balance
        return total

    @property
    def is_enabled(self) -> bool:
        return self.pending_months <= self.max_debt_months


class DebtGate:

    def __init__(self, payment_repo: PaymentRepository) -> None:
        self._payment_repo = payment_repo

    def assess(
        self, member_id: int, max_debt_months: int = DEFAULT_MAX_DEBT_MONTHS
    ) -> DebtAssessment:
        return DebtAssessment(
            pending_payments=self._payment_repo.list_unsettled(member_id),
            max_debt_months=max_debt_months,
        )

    def is_enabled(
        self, member_id: int, max_debt_months: int = DEFAULT_MAX_DEBT_MONTHS
    ) -> bool:
        return self.assess(member_id, max_debt_months).is_enabled
