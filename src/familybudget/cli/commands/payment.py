"""Mandatory payment commands."""

import click

from familybudget.cli.error_handling import handle_domain_error
from familybudget.cli.parsing import parse_amount_or_exit, parse_date_or_exit
from familybudget.domain.entities import Payment
from familybudget.domain.errors import DomainError
from familybudget.domain.payment import PaymentService


def _format_payment(payment: Payment) -> str:
    status = "paid" if payment.is_completed else "due"
    return (
        f"ID: {payment.id:3d} | {payment.name:20s} | {payment.amount:>10,d} | "
        f"{payment.due_date.isoformat()} | {payment.category:12s} | {status}"
    )


@click.group()
def payment_group():
    """Manage mandatory payments."""
    pass


@payment_group.command("list")
@click.pass_context
def list_payments(ctx):
    """List mandatory payments."""
    service = PaymentService(ctx.obj["db"])

    try:
        payments = service.list_payments(ctx.obj["user"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not payments:
        click.echo("No payments found.")
        return

    click.echo("\nMandatory payments:")
    click.echo("-" * 80)
    for payment in payments:
        click.echo(_format_payment(payment))


@payment_group.command("add")
@click.argument("name", metavar="NAME")
@click.argument("amount", metavar="AMOUNT")
@click.option("--due", "due_date", required=True, help="Due date (YYYY-MM-DD, 'tomorrow', ...)")
@click.option("--category", required=True, help="Payment category (e.g., Utilities)")
@click.pass_context
def add_payment(ctx, name: str, amount: str, due_date: str, category: str):
    """Add a mandatory payment (parents only).

    Examples:
        familybudget payment add "Internet" 900 --due 2024-06-01 --category Utilities
    """
    service = PaymentService(ctx.obj["db"])
    parsed_amount = parse_amount_or_exit(ctx, amount)
    parsed_due = parse_date_or_exit(ctx, due_date, "due date")

    try:
        payment = service.create_payment(
            ctx.obj["user"],
            name=name,
            amount=parsed_amount,
            due_date=parsed_due,
            category=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created payment '{payment.name}' (ID: {payment.id})")


@payment_group.command("complete")
@click.argument("payment_id", type=int, metavar="PAYMENT_ID")
@click.option("--reopen", is_flag=True, help="Mark the payment as due again")
@click.pass_context
def complete_payment(ctx, payment_id: int, reopen: bool):
    """Mark a payment as paid (parents only)."""
    service = PaymentService(ctx.obj["db"])

    try:
        payment = service.set_completed(ctx.obj["user"], payment_id, completed=not reopen)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(_format_payment(payment))


def register_commands(cli):
    """Register payment commands with main CLI."""
    cli.add_command(payment_group, name="payment")
