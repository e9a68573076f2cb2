"""Unit tests for the Payment aggregate and its status rules."""

from datetime import date
from decimal import Decimal

import pytest

from clubledger.domain.exceptions import ValidationError
from clubledger.domain.model.payment import (
    UNSET,
    Payment,
    PaymentAmendment,
    PaymentStatus,
    PaymentType,
    classify_payment_type,
    derive_payment_status,
)
from clubledger.domain.model.value_objects import BillingPeriod, Money

DUE = date(2025, 3, 10)


def _payment(amount_due: str = "1000") -> Payment:
    return Payment.bill(1, BillingPeriod(year=2025, month=3), Money.of(amount_due), DUE)


class TestClassifyPaymentType:

    @pytest.mark.parametrize(
        ("paid", "expected"),
        [
            ("0", PaymentType.NONE),
            ("499.99", PaymentType.PARTIAL),
            ("500", PaymentType.MINIMUM),
            ("999", PaymentType.MINIMUM),
            ("1000", PaymentType.COMPLETE),
            ("1500", PaymentType.COMPLETE),
        ],
    )
    def test_thresholds(self, paid, expected):
        assert classify_payment_type(Money.of(paid), Money.of("1000")) == expected

    def test_custom_minimum_ratio(self):
        result = classify_payment_type(Money.of("500"), Money.of("1000"), Decimal("0.6"))
        assert result == PaymentType.PARTIAL


class TestDerivePaymentStatus:

    def test_paid_when_covered(self):
        assert derive_payment_status(Money.of("1000"), Money.of("1000"), DUE, DUE) == PaymentStatus.PAID

    def test_partial_when_something_paid(self):
        late = date(2025, 4, 1)
        assert derive_payment_status(Money.of("1"), Money.of("1000"), DUE, late) == PaymentStatus.PARTIAL

    def test_overdue_when_nothing_paid_after_due_date(self):
        late = date(2025, 3, 11)
        assert derive_payment_status(Money.zero(), Money.of("1000"), DUE, late) == PaymentStatus.OVERDUE

    def test_pending_on_due_date(self):
        assert derive_payment_status(Money.zero(), Money.of("1000"), DUE, DUE) == PaymentStatus.PENDING


class TestBill:

    def test_new_payment_starts_unpaid(self):
        payment = _payment()
        assert payment.id is None
        assert payment.amount_paid == Money.zero()
        assert payment.balance == Money.of("1000")
        assert payment.payment_type == PaymentType.NONE
        assert payment.status == PaymentStatus.PENDING


class TestApply:

    def test_minimum_then_complete(self):
        payment = _payment()

        payment.apply(Money.of("500"), today=DUE)
        assert payment.payment_type == PaymentType.MINIMUM
        assert payment.status == PaymentStatus.PARTIAL
        assert payment.balance == Money.of("500")

        payment.apply(Money.of("600"), today=DUE)
        assert payment.amount_paid == Money.of("1100")
        assert payment.payment_type == PaymentType.COMPLETE
        assert payment.status == PaymentStatus.PAID
        assert payment.balance == Money.zero()

    def test_amount_paid_never_decreases(self):
        payment = _payment()
        before = payment.amount_paid
        for amount in ("100", "0.01", "250"):
            payment.apply(Money.of(amount), today=DUE)
            assert payment.amount_paid >= before
            before = payment.amount_paid

    def test_zero_amount_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _payment().apply(Money.zero(), today=DUE)

    def test_payment_date_defaults_to_today(self):
        payment = _payment()
        payment.apply(Money.of("10"), today=date(2025, 3, 2))
        assert payment.payment_date == date(2025, 3, 2)

    def test_method_and_notes_kept_when_not_given(self):
        payment = _payment()
        payment.apply(Money.of("10"), today=DUE, method="cash", notes="first")
        payment.apply(Money.of("10"), today=DUE)
        assert payment.payment_method == "cash"
        assert payment.notes == "first"

    def test_overdue_payment_becomes_partial_once_paid(self):
        payment = _payment()
        payment.status = PaymentStatus.OVERDUE
        payment.apply(Money.of("100"), today=date(2025, 5, 1))
        assert payment.status == PaymentStatus.PARTIAL


class TestOverrideStatus:

    def test_amounts_untouched(self):
        payment = _payment()
        payment.override_status(PaymentStatus.PAID)
        assert payment.status == PaymentStatus.PAID
        assert payment.balance == Money.of("1000")

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValidationError, match="Invalid payment status"):
            PaymentStatus.parse("cancelado")


class TestAmend:

    def test_only_present_fields_change(self):
        payment = _payment()
        payment.apply(Money.of("10"), today=DUE, method="cash", notes="keep me")

        payment.amend(PaymentAmendment(amount_due=Money.of("800")), today=DUE)

        assert payment.amount_due == Money.of("800")
        assert payment.payment_method == "cash"
        assert payment.notes == "keep me"

    def test_none_clears_optional_field(self):
        payment = _payment()
        payment.notes = "old"
        payment.amend(PaymentAmendment(notes=None), today=DUE)
        assert payment.notes is None

    def test_status_rederived(self):
        payment = _payment()
        payment.amend(PaymentAmendment(amount_paid=Money.of("1000")), today=DUE)
        assert payment.status == PaymentStatus.PAID
        assert payment.payment_type == PaymentType.COMPLETE

    def test_moving_due_date_back_makes_unpaid_overdue(self):
        payment = _payment()
        payment.amend(PaymentAmendment(due_date=date(2025, 3, 1)), today=DUE)
        assert payment.status == PaymentStatus.OVERDUE

    def test_empty_amendment_rejected(self):
        with pytest.raises(ValidationError, match="Nothing to amend"):
            _payment().amend(PaymentAmendment(), today=DUE)

    def test_zero_amount_due_rejected(self):
        with pytest.raises(ValidationError, match="Amount due"):
            _payment().amend(PaymentAmendment(amount_due=Money.zero()), today=DUE)

    def test_unset_is_distinct_from_none(self):
        assert PaymentAmendment().notes is UNSET
        assert PaymentAmendment(notes=None).notes is None
