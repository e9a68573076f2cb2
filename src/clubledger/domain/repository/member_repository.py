"""Abstract repositories for the read-only membership collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod

from clubledger.domain.model.member import Category, Member


class MemberRepository(ABC):

    @abstractmethod
    def get_by_id(self, member_id: int) -> Member | None:
        """Return a member by ID, or None if not found."""

    @abstractmethod
    def list_active(self) -> list[Member]:
        """Return every member whose status is active."""


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: int) -> Category | None:
        """Return a fee category by ID, or None if not found."""
