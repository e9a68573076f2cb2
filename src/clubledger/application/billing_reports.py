"""Application services: billing reports (queries).

Neither report changes state; both read inside a unit of work so they
see one consistent snapshot of the ledger.
"""

from __future__ import annotations

from decimal import Decimal

from clubledger.application.dto import DebtorDTO, DebtorsReportDTO, MonthlySummaryDTO
from clubledger.domain.model.payment import Payment, PaymentStatus
from clubledger.domain.model.value_objects import BillingPeriod, Money
from clubledger.domain.repository.unit_of_work import UnitOfWork


def _sum(amounts: list[Money]) -> Money:
    total = Money.zero()
    for amount in amounts:
        total = total + amount
    return total


class MonthlySummaryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, month: int, year: int) -> MonthlySummaryDTO:
        period = BillingPeriod(year=year, month=month)
        with self._uow as uow:
            payments = uow.payments.list_for_period(period)

        def count(status: PaymentStatus) -> int:
            return sum(1 for p in payments if p.status == status)

        return MonthlySummaryDTO(
            period=str(period),
            total_payments=len(payments),
            paid_count=count(PaymentStatus.PAID),
            partial_count=count(PaymentStatus.PARTIAL),
            pending_count=count(PaymentStatus.PENDING),
            overdue_count=count(PaymentStatus.OVERDUE),
            total_expected=str(_sum([p.amount_due for p in payments])),
            total_collected=str(_sum([p.amount_paid for p in payments])),
            total_pending=str(_sum([p.balance for p in payments])),
        )


class DebtorsReportHandler:
    """Active members with at least one unsettled period.

    Sorted by total debt, then by number of pending months, both descending.
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        min_debt: str | Decimal | None = None,
        min_months: int | None = None,
    ) -> DebtorsReportDTO:
        threshold = Money.of(min_debt) if min_debt is not None else None

        with self._uow as uow:
            by_member: dict[int, list[Payment]] = {}
            for payment in uow.payments.list_unsettled():
                by_member.setdefault(payment.member_id, []).append(payment)
            members = {m.id: m for m in uow.members.list_active()}

        rows: list[tuple[Money, int, DebtorDTO]] = []
        for member_id, payments in by_member.items():
            member = members.get(member_id)
            if member is None:
                continue
            debt = _sum([p.balance for p in payments])
            if threshold is not None and debt < threshold:
                continue
            if min_months is not None and len(payments) < min_months:
                continue
            periods = sorted(p.period for p in payments)
            rows.append((
                debt,
                len(payments),
                DebtorDTO(
                    member_id=member_id,
                    name=member.full_name,
                    is_member=member.is_member,
                    pending_months=len(payments),
                    total_debt=str(debt),
                    oldest_period=str(periods[0]),
                    newest_period=str(periods[-1]),
                ),
            ))

        rows.sort(key=lambda row: (row[0].amount, row[1]), reverse=True)
        return DebtorsReportDTO(
            total_debtors=len(rows),
            total_debt=str(_sum([row[0] for row in rows])),
            debtors=[row[2] for row in rows],
        )
