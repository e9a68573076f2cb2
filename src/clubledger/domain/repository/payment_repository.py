"""Abstract repository for the Payment aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from clubledger.domain.model.payment import Payment
from clubledger.domain.model.value_objects import BillingPeriod


class PaymentRepository(ABC):

    @abstractmethod
    def get_by_id(self, payment_id: int) -> Payment | None:
        """Return a payment by ID, or None if not found."""

    @abstractmethod
    def add(self, payment: Payment) -> None:
        """Insert a new payment and assign its ID.

        Raises ConflictError if the member already has a payment for the
        same period. The check must be enforced by the store itself.
        """

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """Persist changes to an existing payment."""

    @abstractmethod
    def delete(self, payment_id: int) -> bool:
        """Remove a payment. Returns False if it did not exist."""

    @abstractmethod
    def list_unsettled(self, member_id: int | None = None) -> list[Payment]:
        """Pending, partial or overdue payments, oldest period first.

        Restricted to one member when *member_id* is given.
        """

    @abstractmethod
    def list_for_period(self, period: BillingPeriod) -> list[Payment]:
        """Every payment billed for *period*."""
