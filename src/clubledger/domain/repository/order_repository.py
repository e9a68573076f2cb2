"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from clubledger.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order with all of its items and assign its ID."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist the status of an existing order."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove an order; its items go with it."""

    @abstractmethod
    def list_created_between(
        self, from_date: date | None = None, to_date: date | None = None
    ) -> list[Order]:
        """Return orders whose creation day (UTC) lies in the inclusive bounds.

        A missing bound leaves that side open.
        """
