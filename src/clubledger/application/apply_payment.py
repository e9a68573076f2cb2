"""Application service: Apply Payment use case.

Adds a received amount to a payment. Amounts only accumulate through this
path; type, status and balance are re-derived from the new totals.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from decimal import Decimal, InvalidOperation

from clubledger.application.context import RequestContext
from clubledger.application.dto import PaymentReceiptDTO
from clubledger.domain.exceptions import EntityNotFoundError, ValidationError
from clubledger.domain.model.payment import DEFAULT_MINIMUM_RATIO, PaymentType
from clubledger.domain.model.value_objects import Money
from clubledger.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

_MESSAGES = {
    PaymentType.COMPLETE: "Payment complete",
    PaymentType.MINIMUM: "Minimum payment recorded",
}


class ApplyPaymentHandler:

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
        amount: str | Decimal,
        method: str | None = None,
        paid_on: date | None = None,
        notes: str | None = None,
    ) -> PaymentReceiptDTO:
        received = self._parse_amount(amount)

        with self._uow as uow:
            payment = uow.payments.get_by_id(payment_id)
            if payment is None:
                raise EntityNotFoundError(f"Payment #{payment_id} not found")

            payment.apply(
                received,
                today=self._clock(),
                method=method,
                paid_on=paid_on,
                notes=notes,
                minimum_ratio=self._minimum_ratio,
            )
            uow.payments.save(payment)
            uow.commit()

        logger.info(
            "Applied %s to payment #%s: paid=%s status=%s (actor=%s)",
            received, payment_id, payment.amount_paid, payment.status.value, ctx,
        )
        return PaymentReceiptDTO(
            id=payment_id,
            amount_received=str(received),
            total_paid=str(payment.amount_paid),
            balance=str(payment.balance),
            payment_type=payment.payment_type.value,
            status=payment.status.value,
            message=_MESSAGES.get(payment.payment_type, "Partial payment recorded"),
        )

    @staticmethod
    def _parse_amount(amount: str | Decimal) -> Money:
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Invalid payment amount: {amount!r}") from None
        if not value.is_finite() or value <= 0:
            raise ValidationError("Payment amount must be greater than zero")
        return Money(value)
