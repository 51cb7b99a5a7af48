"""Savings goal commands."""

import click

from familybudget.cli.error_handling import handle_domain_error
from familybudget.cli.parsing import parse_amount_or_exit
from familybudget.domain.errors import DomainError
from familybudget.domain.savings import SavingsService


@click.group()
def savings_group():
    """Manage savings goals."""
    pass


@savings_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List savings goals."""
    service = SavingsService(ctx.obj["db"])

    try:
        goals = service.list_goals(ctx.obj["user"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not goals:
        click.echo("No savings goals found.")
        return

    click.echo("\nSavings goals:")
    click.echo("-" * 60)
    for goal in goals:
        click.echo(
            f"ID: {goal.id:3d} | {goal.name:20s} | {goal.current_amount:,d} / "
            f"{goal.target_amount:,d} ({goal.progress}%)"
        )


@savings_group.command("history")
@click.argument("goal_id", type=int, metavar="GOAL_ID")
@click.pass_context
def show_history(ctx, goal_id: int):
    """Show the deposits and withdrawals of a goal."""
    service = SavingsService(ctx.obj["db"])

    try:
        entries = service.get_history(ctx.obj["user"], goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No history entries found.")
        return

    for entry in entries:
        click.echo(
            f"{entry.date.isoformat()} | {entry.type.value:10s} | {entry.amount:>10,d} | {entry.description}"
        )


def _move(ctx, goal_id: int, amount: str, description: str, withdraw: bool) -> None:
    service = SavingsService(ctx.obj["db"])
    parsed_amount = parse_amount_or_exit(ctx, amount)

    try:
        if withdraw:
            movement = service.withdraw(ctx.obj["user"], goal_id, parsed_amount, description)
        else:
            movement = service.deposit(ctx.obj["user"], goal_id, parsed_amount, description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    goal = movement.goal
    click.echo(f"{movement.history.type.value.capitalize()} of {movement.history.amount:,d} recorded")
    click.echo(f"{goal.name}: {goal.current_amount:,d} / {goal.target_amount:,d} ({goal.progress}%)")


@savings_group.command("deposit")
@click.argument("goal_id", type=int, metavar="GOAL_ID")
@click.argument("amount", metavar="AMOUNT")
@click.option("--description", default="Deposit", show_default=True, help="Note for the history entry")
@click.pass_context
def deposit(ctx, goal_id: int, amount: str, description: str):
    """Add money to a savings goal."""
    _move(ctx, goal_id, amount, description, withdraw=False)


@savings_group.command("withdraw")
@click.argument("goal_id", type=int, metavar="GOAL_ID")
@click.argument("amount", metavar="AMOUNT")
@click.option("--description", default="Withdrawal", show_default=True, help="Note for the history entry")
@click.pass_context
def withdraw(ctx, goal_id: int, amount: str, description: str):
    """Take money out of a savings goal (parents only)."""
    _move(ctx, goal_id, amount, description, withdraw=True)


def register_commands(cli):
    """Register savings commands with main CLI."""
    cli.add_command(savings_group, name="savings")
