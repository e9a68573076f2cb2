import logging

import click

from clubledger.application.context import RequestContext
from clubledger.infrastructure.bootstrap import settings
from clubledger.infrastructure.cli.billing_commands import (
    billing_amend,
    billing_bill,
    billing_bill_all,
    billing_debtors,
    billing_eligibility,
    billing_pay,
    billing_remove,
    billing_set_status,
    billing_summary,
)
from clubledger.infrastructure.cli.db_commands import db_init
from clubledger.infrastructure.cli.order_commands import (
    order_delete,
    order_place,
    order_status,
    order_summary,
)
from clubledger.infrastructure.cli.stock_commands import stock_adjust

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@click.group()
@click.option(
    "--actor",
    envvar="CLUB_ACTOR",
    default="admin",
    show_default=True,
    help="Authenticated operator recorded with every change.",
)
@click.pass_context
def cli(ctx: click.Context, actor: str) -> None:
    """Club back office: dues ledger and storefront orders."""
    try:
        log_level = settings().log_level
    except RuntimeError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    ctx.obj = RequestContext(actor=actor)


@cli.group()
def billing() -> None:
    """Bill periods and record payments."""


@cli.group()
def order() -> None:
    """Place and manage storefront orders."""


@cli.group()
def stock() -> None:
    """Adjust product stock outside orders."""


@cli.group()
def db() -> None:
    """Manage the database."""


# Register subcommands
billing.add_command(billing_amend)
billing.add_command(billing_bill)
billing.add_command(billing_bill_all)
billing.add_command(billing_debtors)
billing.add_command(billing_eligibility)
billing.add_command(billing_pay)
billing.add_command(billing_remove)
billing.add_command(billing_set_status)
billing.add_command(billing_summary)
order.add_command(order_delete)
order.add_command(order_place)
order.add_command(order_status)
order.add_command(order_summary)
stock.add_command(stock_adjust)
db.add_command(db_init)
