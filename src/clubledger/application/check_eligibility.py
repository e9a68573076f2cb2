"""Application service: Check Eligibility use case (query).

Reports whether a member may purchase, with the unsettled periods that
drive the decision.
"""

from __future__ import annotations

from clubledger.application.dto import EligibilityDTO, PendingPeriodDTO
from clubledger.domain.exceptions import EntityNotFoundError, ValidationError
from clubledger.domain.repository.unit_of_work import UnitOfWork
from clubledger.domain.service.debt_gate import DEFAULT_MAX_DEBT_MONTHS, DebtGate


class CheckEligibilityHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, member_id: int, max_debt_months: int = DEFAULT_MAX_DEBT_MONTHS
    ) -> EligibilityDTO:
        if max_debt_months < 0:
            raise ValidationError("max_debt_months cannot be negative")

        with self._uow as uow:
            member = uow.members.get_by_id(member_id)
            if member is None:
                raise EntityNotFoundError(f"Member #{member_id} not found")
            assessment = DebtGate(uow.payments).assess(member_id, max_debt_months)

        pending = assessment.pending_months
        if not member.is_active:
            is_enabled = False
            reason = "Member is inactive"
        elif not assessment.is_enabled:
            is_enabled = False
            reason = (
                f"Debt exceeds the allowed limit "
                f"({pending} months, maximum {max_debt_months})"
            )
        else:
            is_enabled = True
            reason = (
                "No debt" if pending == 0
                else f"Debt within limit ({pending}/{max_debt_months} months)"
            )

        return EligibilityDTO(
            member_id=member.id,
            name=member.full_name,
            is_enabled=is_enabled,
            reason=reason,
            pending_months=pending,
            total_debt=str(assessment.total_debt),
            max_allowed_months=max_debt_months,
            pending_payments=[
                PendingPeriodDTO(
                    period=str(p.period),
                    balance=str(p.balance),
                    status=p.status.value,
                )
                for p in assessment.pending_payments
            ],
        )
