"""Payment aggregate: one billed period of dues for one member.

The amount due is a snapshot taken when the period is billed; later changes
to the member's category never touch it. Payment type and status are pure
functions of the current amounts and dates and are re-derived on every
mutation rather than stored as independent state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from clubledger.domain.exceptions import ValidationError
from clubledger.domain.model.value_objects import BillingPeriod, Money

DEFAULT_MINIMUM_RATIO = Decimal("0.5")


class PaymentType(Enum):
    NONE = "sin_pago"
    PARTIAL = "parcial"
    MINIMUM = "minimo"
    COMPLETE = "completo"


class PaymentStatus(Enum):
    PENDING = "pendiente"
    PARTIAL = "parcial"
    PAID = "pagado"
    OVERDUE = "vencido"

    @classmethod
    def parse(cls, raw: str) -> PaymentStatus:
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(f"'{s.value}'" for s in cls)
            raise ValidationError(
                f"Invalid payment status '{raw}'; expected one of {allowed}"
            ) from None


# Statuses that count as a debt month.
UNSETTLED_STATUSES = (PaymentStatus.PENDING, PaymentStatus.PARTIAL, PaymentStatus.OVERDUE)


def classify_payment_type(
    paid: Money,
    due: Money,
    minimum_ratio: Decimal = DEFAULT_MINIMUM_RATIO,
) -> PaymentType:
    if paid.is_zero:
        return PaymentType.NONE
    if paid >= due:
        return PaymentType.COMPLETE
    if paid.amount >= due.fraction(minimum_ratio):
        return PaymentType.MINIMUM
    return PaymentType.PARTIAL


def derive_payment_status(paid: Money, due: Money, due_date: date, today: date) -> PaymentStatus:
    if paid >= due:
        return PaymentStatus.PAID
    if not paid.is_zero:
        return PaymentStatus.PARTIAL
    if today > due_date:
        return PaymentStatus.OVERDUE
    return PaymentStatus.PENDING


class _Unset(Enum):
    UNSET = "UNSET"


UNSET = _Unset.UNSET


@dataclass(frozen=True)
class PaymentAmendment:
    """Administrative correction of a payment.

    Every field defaults to ``UNSET`` meaning "leave as is"; passing ``None``
    to one of the optional text/date fields clears it.
    """

    amount_due: Money | _Unset = UNSET
    amount_paid: Money | _Unset = UNSET
    due_date: date | _Unset = UNSET
    payment_method: str | None | _Unset = UNSET
    payment_date: date | None | _Unset = UNSET
    notes: str | None | _Unset = UNSET

    @property
    def is_empty(self) -> bool:
        return all(
            getattr(self, name) is UNSET
            for name in (
                "amount_due", "amount_paid", "due_date",
                "payment_method", "payment_date", "notes",
            )
        )


@dataclass
class Payment:
    """Aggregate root for dues payments.

    Use ``Payment.bill()`` for a new period. The plain ``__init__`` lets the
    repository reconstitute stored payments without re-validating them.
    """

    id: int | None
    member_id: int
    period: BillingPeriod
    amount_due: Money
    due_date: date
    amount_paid: Money = field(default_factory=Money.zero)
    payment_type: PaymentType = PaymentType.NONE
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str | None = None
    payment_date: date | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW periods only) ----------------------------------

    @staticmethod
    def bill(
        member_id: int,
        period: BillingPeriod,
        amount_due: Money,
        due_date: date,
        notes: str | None = None,
    ) -> Payment:
        return Payment(
            id=None,
            member_id=member_id,
            period=period,
            amount_due=amount_due,
            due_date=due_date,
            notes=notes or None,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def balance(self) -> Money:
        return self.amount_due.floor_minus(self.amount_paid)

    @property
    def is_settled(self) -> bool:
        return self.status not in UNSETTLED_STATUSES

    # --- State transitions ----------------------------------------------------

    def apply(
        self,
        amount: Money,
        today: date,
        method: str | None = None,
        paid_on: date | None = None,
        notes: str | None = None,
        minimum_ratio: Decimal = DEFAULT_MINIMUM_RATIO,
    ) -> None:
        """Accumulate a received amount and re-derive type and status.

        Amounts beyond ``amount_due`` are accepted; the surplus is not
        carried forward as credit (balance simply floors at zero).
        """
        if amount.is_zero:
            raise ValidationError("Payment amount must be greater than zero")

        self.amount_paid = self.amount_paid + amount
        self._rederive(today, minimum_ratio)

        if method:
            self.payment_method = method
        self.payment_date = paid_on or today
        if notes:
            self.notes = notes

    def override_status(self, status: PaymentStatus) -> None:
        """Administrative override. Amounts are left untouched."""
        self.status = status

    def amend(
        self,
        amendment: PaymentAmendment,
        today: date,
        minimum_ratio: Decimal = DEFAULT_MINIMUM_RATIO,
    ) -> None:
        if amendment.is_empty:
            raise ValidationError("Nothing to amend")

        if amendment.amount_due is not UNSET:
            if amendment.amount_due.is_zero:
                raise ValidationError("Amount due must be greater than zero")
            self.amount_due = amendment.amount_due
        if amendment.amount_paid is not UNSET:
            self.amount_paid = amendment.amount_paid
        if amendment.due_date is not UNSET:
            self.due_date = amendment.due_date
        if amendment.payment_method is not UNSET:
            self.payment_method = amendment.payment_method
        if amendment.payment_date is not UNSET:
            self.payment_date = amendment.payment_date
        if amendment.notes is not UNSET:
            self.notes = amendment.notes

        self._rederive(today, minimum_ratio)

    # --- Internal helpers -----------------------------------------------------

    def _rederive(self, today: date, minimum_ratio: Decimal) -> None:
        self.payment_type = classify_payment_type(
            self.amount_paid, self.amount_due, minimum_ratio
        )
        self.status = derive_payment_status(
            self.amount_paid, self.amount_due, self.due_date, today
        )
