"""Member and Category: read-only collaborators of the ledger.

Both are owned by the membership subsystem. The ledger only reads them
to price a period and to decide whether a member may purchase.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from clubledger.domain.model.value_objects import Money


class MemberStatus(Enum):
    ACTIVE = "activo"
    INACTIVE = "inactivo"


@dataclass(frozen=True)
class Category:
    """Fee category. Amounts may change between periods, never mid-billing."""

    id: int
    name: str
    amount_member: Money
    amount_non_member: Money

    def fee_for(self, is_member: bool) -> Money:
        return self.amount_member if is_member else self.amount_non_member


@dataclass(frozen=True)
class Member:
    id: int
    first_name: str
    last_name: str
    category_id: int
    is_member: bool = False
    status: MemberStatus = MemberStatus.ACTIVE

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE
