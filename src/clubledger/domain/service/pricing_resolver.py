"""Domain service: Pricing Resolver.

Answers "how much does this member owe for one period?" from the
member's fee category and membership flag. Pure read.
"""

from __future__ import annotations

from clubledger.domain.exceptions import EntityNotFoundError
from clubledger.domain.model.value_objects import Money
from clubledger.domain.repository.member_repository import (
    CategoryRepository,
    MemberRepository,
)


class PricingResolver:

    def __init__(
        self,
        member_repo: MemberRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._member_repo = member_repo
        self._category_repo = category_repo

    def amount_due(self, member_id: int) -> Money:
        member = self._member_repo.get_by_id(member_id)
        if member is None:
            raise EntityNotFoundError(f"Member #{member_id} not found")

        category = self._category_repo.get_by_id(member.category_id)
        if category is None:
            raise EntityNotFoundError(
                f"Category #{member.category_id} of member #{member_id} not found"
            )

        return category.fee_for(member.is_member)
