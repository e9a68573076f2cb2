"""CLI commands for the dues ledger."""

from __future__ import annotations

from datetime import datetime

import click

from clubledger.application.amend_payment import AmendPaymentHandler
from clubledger.application.apply_payment import ApplyPaymentHandler
from clubledger.application.bill_all_active import BillAllActiveHandler
from clubledger.application.bill_period import BillPeriodHandler
from clubledger.application.billing_reports import DebtorsReportHandler, MonthlySummaryHandler
from clubledger.application.check_eligibility import CheckEligibilityHandler
from clubledger.application.context import RequestContext
from clubledger.application.dto import PaymentDTO
from clubledger.application.remove_payment import RemovePaymentHandler
from clubledger.application.set_payment_status import SetPaymentStatusHandler
from clubledger.domain.model.payment import UNSET, PaymentAmendment, PaymentStatus
from clubledger.domain.model.value_objects import Money
from clubledger.infrastructure.bootstrap import settings, unit_of_work
from clubledger.infrastructure.cli.errors import reporting_errors

DATE = click.DateTime(formats=["%Y-%m-%d"])
PAYMENT_STATUSES = click.Choice([s.value for s in PaymentStatus])


def _date_or_none(value: datetime | None):
    return value.date() if value else None


def _display_payment(dto: PaymentDTO) -> None:
    click.echo(f"Payment #{dto.id}  member #{dto.member_id}  period {dto.period}")
    click.echo(f"  Amount due:  {dto.amount_due:>12}")
    click.echo(f"  Amount paid: {dto.amount_paid:>12}")
    click.echo(f"  Balance:     {dto.balance:>12}")
    click.echo(f"  Type: {dto.payment_type}   Status: {dto.status}   Due: {dto.due_date}")
    if dto.payment_method or dto.payment_date:
        click.echo(f"  Paid via {dto.payment_method or '-'} on {dto.payment_date or '-'}")
    if dto.notes:
        click.echo(f"  Notes: {dto.notes}")


@click.command("bill")
@click.option("--member", "member_id", required=True, type=int, help="Member ID.")
@click.option("--month", required=True, type=click.IntRange(1, 12), help="Billing month.")
@click.option("--year", required=True, type=int, help="Billing year.")
@click.option("--due-date", type=DATE, default=None, help="Due date (YYYY-MM-DD).")
@click.option("--notes", default=None, help="Free-form notes.")
@click.pass_obj
def billing_bill(ctx: RequestContext, member_id: int, month: int, year: int,
                 due_date: datetime | None, notes: str | None) -> None:
    """Bill one period of dues to a member."""
    handler = BillPeriodHandler(unit_of_work(), due_day=settings().due_day)

    with reporting_errors():
        dto = handler.handle(ctx, member_id, month, year,
                             due_date=_date_or_none(due_date), notes=notes)

    click.echo("Period billed.")
    _display_payment(dto)


@click.command("bill-all")
@click.option("--month", required=True, type=click.IntRange(1, 12), help="Billing month.")
@click.option("--year", required=True, type=int, help="Billing year.")
@click.option("--due-date", type=DATE, default=None, help="Due date (YYYY-MM-DD).")
@click.pass_obj
def billing_bill_all(ctx: RequestContext, month: int, year: int,
                     due_date: datetime | None) -> None:
    """Bill one period to every active member (already billed ones are skipped)."""
    handler = BillAllActiveHandler(unit_of_work(), due_day=settings().due_day)

    with reporting_errors():
        dto = handler.handle(ctx, month, year, due_date=_date_or_none(due_date))

    click.echo(f"Dues generated for {dto.period}")
    click.echo(f"  created: {dto.created}  skipped: {dto.skipped}  members: {dto.total_considered}")


@click.command("pay")
@click.option("--id", "payment_id", required=True, type=int, help="Payment ID.")
@click.option("--amount", required=True, help="Amount received (e.g. 500.00).")
@click.option("--method", default=None, help="Payment method (cash, transfer, ...).")
@click.option("--date", "paid_on", type=DATE, default=None, help="Payment date (default today).")
@click.option("--notes", default=None, help="Free-form notes.")
@click.pass_obj
def billing_pay(ctx: RequestContext, payment_id: int, amount: str, method: str | None,
                paid_on: datetime | None, notes: str | None) -> None:
    """Apply a received amount to a payment."""
    cfg = settings()
    handler = ApplyPaymentHandler(unit_of_work(), minimum_ratio=cfg.minimum_payment_ratio)

    with reporting_errors():
        dto = handler.handle(ctx, payment_id, amount, method=method,
                             paid_on=_date_or_none(paid_on), notes=notes)

    click.echo(f"{dto.message} (payment #{dto.id})")
    click.echo(f"  received {dto.amount_received}, total paid {dto.total_paid}, balance {dto.balance}")
    click.echo(f"  type={dto.payment_type} status={dto.status}")


@click.command("set-status")
@click.option("--id", "payment_id", required=True, type=int, help="Payment ID.")
@click.option("--status", required=True, type=PAYMENT_STATUSES, help="New status.")
@click.pass_obj
def billing_set_status(ctx: RequestContext, payment_id: int, status: str) -> None:
    """Override a payment's status without touching its amounts."""
    handler = SetPaymentStatusHandler(unit_of_work())

    with reporting_errors():
        dto = handler.handle(ctx, payment_id, status)

    click.echo(f"Payment #{dto.id} status set to '{dto.status}'.")


@click.command("amend")
@click.option("--id", "payment_id", required=True, type=int, help="Payment ID.")
@click.option("--amount-due", default=None, help="Corrected amount due.")
@click.option("--amount-paid", default=None, help="Corrected amount paid.")
@click.option("--due-date", type=DATE, default=None, help="Corrected due date.")
@click.option("--method", default=None, help="Corrected payment method.")
@click.option("--date", "paid_on", type=DATE, default=None, help="Corrected payment date.")
@click.option("--notes", default=None, help="Replacement notes.")
@click.option("--clear-notes", is_flag=True, default=False, help="Remove the notes.")
@click.pass_obj
def billing_amend(ctx: RequestContext, payment_id: int, amount_due: str | None,
                  amount_paid: str | None, due_date: datetime | None, method: str | None,
                  paid_on: datetime | None, notes: str | None, clear_notes: bool) -> None:
    """Correct a payment's amounts, dates or notes."""
    if notes is not None and clear_notes:
        raise click.ClickException("--notes and --clear-notes are mutually exclusive")

    cfg = settings()
    handler = AmendPaymentHandler(unit_of_work(), minimum_ratio=cfg.minimum_payment_ratio)

    with reporting_errors():
        amendment = PaymentAmendment(
            amount_due=Money.of(amount_due) if amount_due is not None else UNSET,
            amount_paid=Money.of(amount_paid) if amount_paid is not None else UNSET,
            due_date=due_date.date() if due_date else UNSET,
            payment_method=method if method is not None else UNSET,
            payment_date=paid_on.date() if paid_on else UNSET,
            notes=None if clear_notes else (notes if notes is not None else UNSET),
        )
        dto = handler.handle(ctx, payment_id, amendment)

    click.echo("Payment amended.")
    _display_payment(dto)


@click.command("remove")
@click.option("--id", "payment_id", required=True, type=int, help="Payment ID.")
@click.pass_obj
def billing_remove(ctx: RequestContext, payment_id: int) -> None:
    """Delete a payment record."""
    handler = RemovePaymentHandler(unit_of_work())

    with reporting_errors():
        handler.handle(ctx, payment_id)

    click.echo(f"Payment #{payment_id} removed.")


@click.command("eligibility")
@click.option("--member", "member_id", required=True, type=int, help="Member ID.")
@click.option("--max-debt-months", type=click.IntRange(min=0), default=None,
              help="Unsettled periods allowed (default from settings).")
def billing_eligibility(member_id: int, max_debt_months: int | None) -> None:
    """Tell whether a member may purchase, and why."""
    limit = max_debt_months if max_debt_months is not None else settings().max_debt_months
    handler = CheckEligibilityHandler(unit_of_work())

    with reporting_errors():
        dto = handler.handle(member_id, max_debt_months=limit)

    verdict = "ENABLED" if dto.is_enabled else "NOT ENABLED"
    click.echo(f"Member #{dto.member_id} {dto.name}: {verdict}")
    click.echo(f"  {dto.reason}")
    click.echo(f"  Pending months: {dto.pending_months}/{dto.max_allowed_months}   "
               f"Total debt: {dto.total_debt}")
    for p in dto.pending_payments:
        click.echo(f"    {p.period:<8} {p.status:<10} {p.balance:>12}")


@click.command("summary")
@click.option("--month", required=True, type=click.IntRange(1, 12), help="Period month.")
@click.option("--year", required=True, type=int, help="Period year.")
def billing_summary(month: int, year: int) -> None:
    """Show collection figures for one period."""
    handler = MonthlySummaryHandler(unit_of_work())

    with reporting_errors():
        dto = handler.handle(month, year)

    click.echo(f"Period {dto.period}: {dto.total_payments} payment(s)")
    click.echo(f"  paid {dto.paid_count}  partial {dto.partial_count}  "
               f"pending {dto.pending_count}  overdue {dto.overdue_count}")
    click.echo(f"  expected {dto.total_expected}  collected {dto.total_collected}  "
               f"pending {dto.total_pending}")


@click.command("debtors")
@click.option("--min-debt", default=None, help="Only members owing at least this much.")
@click.option("--min-months", type=click.IntRange(min=1), default=None,
              help="Only members with at least this many unsettled periods.")
def billing_debtors(min_debt: str | None, min_months: int | None) -> None:
    """List active members with unsettled periods."""
    handler = DebtorsReportHandler(unit_of_work())

    with reporting_errors():
        dto = handler.handle(min_debt=min_debt, min_months=min_months)

    if not dto.debtors:
        click.echo("No debtors found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Months':>6} {'Debt':>12} {'Oldest':>8} {'Newest':>8}")
    click.echo("-" * 73)
    for d in dto.debtors:
        click.echo(
            f"{d.member_id:<6} {d.name:<28} {d.pending_months:>6} {d.total_debt:>12} "
            f"{d.oldest_period:>8} {d.newest_period:>8}"
        )
    click.echo("-" * 73)
    click.echo(f"{dto.total_debtors} debtor(s), total debt {dto.total_debt}")
