"""Abstract unit of work: the transactional query interface.

A unit of work groups every read and write of one use case into a single
atomic transaction::

    with uow:
        ...
        uow.commit()

Leaving the block without calling ``commit()``, or through an exception,
rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from clubledger.domain.repository.member_repository import CategoryRepository, MemberRepository
from clubledger.domain.repository.order_repository import OrderRepository
from clubledger.domain.repository.payment_repository import PaymentRepository
from clubledger.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    members: MemberRepository
    categories: CategoryRepository
    payments: PaymentRepository
    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Commits are explicit; anything left over is discarded.
        try:
            self.rollback()
        finally:
            self._end()

    @abstractmethod
    def _begin(self) -> None:
        """Open the transaction and bind the repositories to it."""

    @abstractmethod
    def _end(self) -> None:
        """Release transaction resources."""

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change."""
