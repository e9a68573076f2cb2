"""Order aggregate: a storefront purchase by a member.

The Order is an aggregate root that owns its line items. Its total is
fixed when the order is placed; later catalog price changes never reach
an existing order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from clubledger.domain.exceptions import ValidationError
from clubledger.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pendiente"
    PAID = "pagado"
    DELIVERED = "entregado"
    CANCELLED = "cancelado"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(f"'{s.value}'" for s in cls)
            raise ValidationError(
                f"Invalid order status '{raw}'; expected one of {allowed}"
            ) from None


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a product at order-placement time."""

    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class StatusTransition:
    """Outcome of a status change, consumed by the stock ledger."""

    previous: OrderStatus
    current: OrderStatus

    @property
    def enters_cancellation(self) -> bool:
        return self.current == OrderStatus.CANCELLED and self.previous != OrderStatus.CANCELLED

    @property
    def leaves_cancellation(self) -> bool:
        return self.previous == OrderStatus.CANCELLED and self.current != OrderStatus.CANCELLED


@dataclass
class Order:
    """Aggregate root for storefront orders.

    Use the ``Order.place()`` factory for new orders. The plain ``__init__``
    lets the repository reconstitute persisted orders without re-validating.
    """

    id: int | None
    member_id: int
    items: list[OrderLineItem]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    payment_method: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        member_id: int,
        items: list[OrderLineItem],
        payment_method: str | None = None,
        notes: str | None = None,
    ) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money(Decimal("0.00"))
        for item in items:
            total = total + item.subtotal

        return Order(
            id=None,
            member_id=member_id,
            items=list(items),
            total=total,
            payment_method=payment_method or None,
            notes=notes or None,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> StatusTransition:
        """Move to *new_status*. Any direction between the four states is allowed.

        Stock side effects of entering or leaving ``cancelado`` must be
        applied by the caller using the returned transition.
        """
        transition = StatusTransition(previous=self.status, current=new_status)
        self.status = new_status
        self.updated_at = datetime.now(timezone.utc)
        return transition

    # --- Computed properties --------------------------------------------------

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCELLED

    def quantities_by_product(self) -> dict[int, int]:
        """Total quantity per product across all line items."""
        result: dict[int, int] = {}
        for item in self.items:
            result[item.product_id] = result.get(item.product_id, 0) + item.quantity.value
        return result
