"""CLI commands for product stock."""

from __future__ import annotations

import click

from clubledger.application.adjust_stock import AdjustStockHandler
from clubledger.application.context import RequestContext
from clubledger.domain.model.product import StockOperation
from clubledger.infrastructure.bootstrap import unit_of_work
from clubledger.infrastructure.cli.errors import reporting_errors


@click.command("adjust")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=click.IntRange(min=0), help="Units.")
@click.option("--operation", type=click.Choice([op.value for op in StockOperation]),
              default=StockOperation.SET.value, show_default=True,
              help="Add to, subtract from (floored at 0) or replace the stock.")
@click.pass_obj
def stock_adjust(ctx: RequestContext, product_id: int, quantity: int, operation: str) -> None:
    """Restock a product or correct its stock count."""
    handler = AdjustStockHandler(unit_of_work())

    with reporting_errors():
        dto = handler.handle(ctx, product_id, quantity, operation=operation)

    click.echo(f"Product #{dto.id} {dto.name}: stock is now {dto.stock}")
