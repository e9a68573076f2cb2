"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from clubledger.application.change_order_status import ChangeOrderStatusHandler
from clubledger.application.context import RequestContext
from clubledger.application.delete_order import DeleteOrderHandler
from clubledger.application.dto import OrderItemSpec
from clubledger.application.place_order import PlaceOrderHandler
from clubledger.application.sales_summary import SalesSummaryHandler
from clubledger.domain.model.order import OrderStatus
from clubledger.infrastructure.bootstrap import settings, unit_of_work
from clubledger.infrastructure.cli.errors import reporting_errors


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '3:2,7:1' (product ID : quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        pid_str, qty_str = pair.split(":", 1)
        try:
            specs.append(OrderItemSpec(product_id=int(pid_str), quantity=int(qty_str)))
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Product ID and quantity must be integers."
            )
    return specs


@click.command("place")
@click.option("--member", "member_id", required=True, type=int, help="Member ID.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--payment-method", default=None, help="How the member will pay.")
@click.option("--notes", default=None, help="Free-form notes.")
@click.option("--check-debt/--no-check-debt", default=True, show_default=True,
              help="Refuse members with too many unpaid periods.")
@click.pass_obj
def order_place(ctx: RequestContext, member_id: int, items: str, payment_method: str | None,
                notes: str | None, check_debt: bool) -> None:
    """Place a storefront order (debits stock)."""
    specs = _parse_items(items)

    handler = PlaceOrderHandler(unit_of_work(), max_debt_months=settings().max_debt_months)

    with reporting_errors():
        dto = handler.handle(ctx, member_id, specs, payment_method=payment_method,
                             notes=notes, check_debt=check_debt)

    click.echo(f"Order #{dto.id} placed  (status={dto.status})")
    click.echo(f"Member: #{dto.member_id}")
    if dto.payment_method:
        click.echo(f"Payment method: {dto.payment_method}")
    if dto.notes:
        click.echo(f"Notes: {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>12}")
    click.echo(f"  {'-'*49}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>12}"
        )
    click.echo(f"  {'-'*49}")
    click.echo(f"  {'Order Total':<27} {dto.total:>22}")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--status", required=True, type=click.Choice([s.value for s in OrderStatus]),
              help="New status.")
@click.pass_obj
def order_status(ctx: RequestContext, order_id: int, status: str) -> None:
    """Change an order's status (cancelling restores stock, reactivating debits it)."""
    handler = ChangeOrderStatusHandler(unit_of_work())

    with reporting_errors():
        dto = handler.handle(ctx, order_id, status)

    click.echo(f"Order #{dto.id} status updated to '{dto.status}'.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.pass_obj
def order_delete(ctx: RequestContext, order_id: int) -> None:
    """Delete an order (restores stock unless it was cancelled)."""
    handler = DeleteOrderHandler(unit_of_work())

    with reporting_errors():
        handler.handle(ctx, order_id)

    click.echo(f"Order #{order_id} deleted.")


@click.command("summary")
@click.option("--from", "from_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="First creation day included (YYYY-MM-DD).")
@click.option("--to", "to_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Last creation day included (YYYY-MM-DD).")
def order_summary(from_date: datetime | None, to_date: datetime | None) -> None:
    """Show order counts per status and sales totals."""
    handler = SalesSummaryHandler(unit_of_work())

    with reporting_errors():
        dto = handler.handle(
            from_date.date() if from_date else None,
            to_date.date() if to_date else None,
        )

    click.echo(f"Orders from {dto.from_date or 'the start'} to {dto.to_date or 'today'}: "
               f"{dto.total_orders}")
    click.echo(f"  pending {dto.pending_orders}  paid {dto.paid_orders}  "
               f"delivered {dto.delivered_orders}  cancelled {dto.cancelled_orders}")
    click.echo(f"  total sales {dto.total_sales}  confirmed sales {dto.confirmed_sales}")
