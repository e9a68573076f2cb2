"""Application service: Sales Summary use case (query).

Order counts per status and sales totals over an optional range of
creation days.
"""

from __future__ import annotations

from datetime import date

from clubledger.application.dto import SalesSummaryDTO
from clubledger.domain.exceptions import ValidationError
from clubledger.domain.model.order import OrderStatus
from clubledger.domain.model.value_objects import Money
from clubledger.domain.repository.unit_of_work import UnitOfWork

CONFIRMED_STATUSES = (OrderStatus.PAID, OrderStatus.DELIVERED)


class SalesSummaryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, from_date: date | None = None, to_date: date | None = None
    ) -> SalesSummaryDTO:
        if from_date and to_date and from_date > to_date:
            raise ValidationError(
                f"Start date {from_date} is after end date {to_date}"
            )

        with self._uow as uow:
            orders = uow.orders.list_created_between(from_date, to_date)

        counts = {status: 0 for status in OrderStatus}
        total_sales = Money.zero()
        confirmed_sales = Money.zero()
        for order in orders:
            counts[order.status] += 1
            if not order.is_cancelled:
                total_sales = total_sales + order.total
            if order.status in CONFIRMED_STATUSES:
                confirmed_sales = confirmed_sales + order.total

        return SalesSummaryDTO(
            from_date=from_date.isoformat() if from_date else None,
            to_date=to_date.isoformat() if to_date else None,
            total_orders=len(orders),
            pending_orders=counts[OrderStatus.PENDING],
            paid_orders=counts[OrderStatus.PAID],
            delivered_orders=counts[OrderStatus.DELIVERED],
            cancelled_orders=counts[OrderStatus.CANCELLED],
            total_sales=str(total_sales),
            confirmed_sales=str(confirmed_sales),
        )
