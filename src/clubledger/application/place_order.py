"""Application service: Place Order use case.

Orchestrates the member checks, the debt gate, the catalog lookups and
the stock ledger. Every check runs before the first write, and every
write happens inside one unit of work: an order is placed completely
(order, items, stock debits) or not at all.
"""

from __future__ import annotations

import logging

from clubledger.application.context import RequestContext
from clubledger.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from clubledger.domain.exceptions import (
    DebtExceededError,
    EntityNotFoundError,
    MembersOnlyError,
    ValidationError,
)
from clubledger.domain.model.member import Member
from clubledger.domain.model.order import Order, OrderLineItem
from clubledger.domain.model.value_objects import Quantity
from clubledger.domain.repository.unit_of_work import UnitOfWork
from clubledger.domain.service.debt_gate import DEFAULT_MAX_DEBT_MONTHS, DebtGate
from clubledger.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        max_debt_months: int = DEFAULT_MAX_DEBT_MONTHS,
    ) -> None:
        self._uow = uow
        self._max_debt_months = max_debt_months

    def handle(
        self,
        ctx: RequestContext,
        member_id: int,
        item_specs: list[OrderItemSpec],
        payment_method: str | None = None,
        notes: str | None = None,
        check_debt: bool = True,
    ) -> OrderDTO:
        """Place a storefront order for a member.

        Steps:
        1. The member must exist and be active.
        2. Unless ``check_debt`` is off, the debt gate must let them buy.
        3. Each product must exist, be available, have stock and, if
           members-only, the member must hold the membership flag.
        4. Line items snapshot the *current* price.
        5. Persist the order and debit stock in the same transaction.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")

        with self._uow as uow:
            member = uow.members.get_by_id(member_id)
            if member is None:
                raise EntityNotFoundError(f"Member #{member_id} not found")
            if not member.is_active:
                raise ValidationError(f"Member #{member_id} is not active")

            if check_debt:
                gate = DebtGate(uow.payments)
                if not gate.is_enabled(member_id, self._max_debt_months):
                    raise DebtExceededError(
                        f"Member #{member_id} has too many unpaid periods "
                        f"to purchase (maximum {self._max_debt_months})"
                    )

            line_items = [self._line_item(uow, member, spec) for spec in item_specs]
            order = Order.place(
                member_id=member_id,
                items=line_items,
                payment_method=payment_method,
                notes=notes,
            )

            StockLedgerService(uow.products).debit_for_order(order)
            uow.orders.add(order)
            uow.commit()

        logger.info(
            "Order #%s placed for member #%s: %d item(s), total %s (actor=%s)",
            order.id, member_id, len(order.items), order.total, ctx,
        )
        return order_to_dto(order)

    @staticmethod
    def _line_item(uow: UnitOfWork, member: Member, spec: OrderItemSpec) -> OrderLineItem:
        quantity = Quantity(spec.quantity)

        product = uow.products.get_by_id(spec.product_id)
        if product is None or not product.is_available:
            raise EntityNotFoundError(
                f"Product #{spec.product_id} not found or inactive"
            )
        product.ensure_can_supply(quantity.value)

        if product.members_only and not member.is_member:
            raise MembersOnlyError(f"Product '{product.name}' is for members only")

        return OrderLineItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,  # <-- price snapshot
        )
