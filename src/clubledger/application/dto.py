"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from clubledger.domain.model.order import Order
from clubledger.domain.model.payment import Payment


# --- Inputs ---------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the member asked for (product ID + quantity)."""

    product_id: int
    quantity: int


# --- Billing outputs ------------------------------------------------------------


@dataclass(frozen=True)
class PaymentDTO:
    id: int
    member_id: int
    period: str  # e.g. "03/2025"
    amount_due: str  # formatted, e.g. "$1000.00"
    amount_paid: str
    balance: str
    payment_type: str
    status: str
    due_date: str
    payment_method: str | None
    payment_date: str | None
    notes: str | None


@dataclass(frozen=True)
class PaymentReceiptDTO:
    """Output of applying a payment."""

    id: int
    amount_received: str
    total_paid: str
    balance: str
    payment_type: str
    status: str
    message: str


@dataclass(frozen=True)
class StatusDTO:
    id: int
    status: str


@dataclass(frozen=True)
class BulkBillingDTO:
    period: str
    created: int
    skipped: int
    total_considered: int


@dataclass(frozen=True)
class PendingPeriodDTO:
    period: str
    balance: str
    status: str


@dataclass(frozen=True)
class EligibilityDTO:
    member_id: int
    name: str
    is_enabled: bool
    reason: str
    pending_months: int
    total_debt: str
    max_allowed_months: int
    pending_payments: list[PendingPeriodDTO]


@dataclass(frozen=True)
class MonthlySummaryDTO:
    period: str
    total_payments: int
    paid_count: int
    partial_count: int
    pending_count: int
    overdue_count: int
    total_expected: str
    total_collected: str
    total_pending: str


@dataclass(frozen=True)
class DebtorDTO:
    member_id: int
    name: str
    is_member: bool
    pending_months: int
    total_debt: str
    oldest_period: str
    newest_period: str


@dataclass(frozen=True)
class DebtorsReportDTO:
    total_debtors: int
    total_debt: str
    debtors: list[DebtorDTO]


# --- Order outputs --------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: int
    product_name: str
    quantity: int
    unit_price: str
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    member_id: int
    status: str
    items: list[OrderLineItemDTO]
    total: str
    payment_method: str | None
    notes: str | None
    created_at: str


@dataclass(frozen=True)
class SalesSummaryDTO:
    from_date: str | None
    to_date: str | None
    total_orders: int
    pending_orders: int
    paid_orders: int
    delivered_orders: int
    cancelled_orders: int
    total_sales: str  # every order except cancelled ones
    confirmed_sales: str  # paid + delivered


# --- Catalog outputs ------------------------------------------------------------


@dataclass(frozen=True)
class StockDTO:
    id: int
    name: str
    stock: int


# --- Mapping --------------------------------------------------------------------


def payment_to_dto(payment: Payment) -> PaymentDTO:
    return PaymentDTO(
        id=payment.id,  # type: ignore[arg-type]
        member_id=payment.member_id,
        period=str(payment.period),
        amount_due=str(payment.amount_due),
        amount_paid=str(payment.amount_paid),
        balance=str(payment.balance),
        payment_type=payment.payment_type.value,
        status=payment.status.value,
        due_date=payment.due_date.isoformat(),
        payment_method=payment.payment_method,
        payment_date=payment.payment_date.isoformat() if payment.payment_date else None,
        notes=payment.notes,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        member_id=order.member_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        total=str(order.total),
        payment_method=order.payment_method,
        notes=order.notes,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
