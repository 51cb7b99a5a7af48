"""Transaction commands."""

import click

from familybudget.cli.error_handling import handle_domain_error
from familybudget.cli.parsing import parse_amount_or_exit, parse_date_or_exit
from familybudget.domain.entities import Transaction, TransactionType
from familybudget.domain.errors import DomainError
from familybudget.domain.transaction import TransactionService


def _format_transaction(txn: Transaction) -> str:
    return (
        f"ID: {txn.id:3d} | {txn.date.isoformat()} | {txn.amount:>10,d} | "
        f"{txn.category:15s} | {txn.description}"
    )


@click.group()
def transaction_group():
    """Manage family transactions."""
    pass


@transaction_group.command("list")
@click.option("--mine", is_flag=True, help="Only show your own transactions")
@click.pass_context
def list_transactions(ctx, mine: bool):
    """List transactions, most recent first."""
    service = TransactionService(ctx.obj["db"])
    user = ctx.obj["user"]

    try:
        if mine:
            transactions = service.list_user_transactions(user)
        else:
            transactions = service.list_family_transactions(user)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 80)
    for txn in transactions:
        click.echo(_format_transaction(txn))


@transaction_group.command("add")
@click.option("--description", required=True, help="What the money was for (at least 3 characters)")
@click.option("--amount", required=True, help="Amount as a positive whole number (e.g., 1200 or 1,200)")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    default=TransactionType.EXPENSE.value,
    show_default=True,
    help="Transaction type",
)
@click.option("--category", required=True, help="Category (e.g., Food)")
@click.option("--date", "txn_date", default="today", show_default=True, help="Transaction date")
@click.pass_context
def add_transaction(ctx, description: str, amount: str, txn_type: str, category: str, txn_date: str):
    """Record a transaction.

    Examples:
        familybudget transaction add --description "Bus pass" --amount 1500 --category Transport
        familybudget transaction add --description "Bonus" --amount 10000 --type income --category Income
    """
    service = TransactionService(ctx.obj["db"])
    parsed_amount = parse_amount_or_exit(ctx, amount)
    parsed_date = parse_date_or_exit(ctx, txn_date)

    try:
        txn = service.create_transaction(
            ctx.obj["user"],
            description=description,
            amount=parsed_amount,
            type=txn_type,
            category=category,
            date=parsed_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded {txn.type.value} (ID: {txn.id})")
    click.echo(_format_transaction(txn))


@transaction_group.command("delete")
@click.argument("transaction_id", type=int, metavar="TRANSACTION_ID")
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])

    try:
        service.delete_transaction(ctx.obj["user"], transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
