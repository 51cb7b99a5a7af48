"""Budget summary commands."""

import click

from familybudget.cli.error_handling import handle_domain_error
from familybudget.cli.parsing import parse_amount_or_exit
from familybudget.domain.budget import BudgetService
from familybudget.domain.errors import DomainError


@click.command("summary")
@click.pass_context
def show_summary(ctx):
    """Show the family budget dashboard."""
    service = BudgetService(ctx.obj["db"])

    try:
        summary = service.budget_summary(ctx.obj["user"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nBudget for {summary.current_period}")
    click.echo("-" * 60)
    click.echo(f"Balance:          {summary.balance:>10,d}")
    click.echo(f"Monthly expenses: {summary.monthly_expenses:>10,d}")
    if summary.savings_goal is not None:
        goal = summary.savings_goal
        click.echo(
            f"Savings goal:     {goal.name} ({goal.current:,d} / {goal.target:,d}, {goal.progress}%)"
        )

    click.echo("\nCategory budgets:")
    click.echo("-" * 60)
    for budget in summary.category_budgets:
        click.echo(f"{budget.name:20s} | spent {budget.spent:>8,d} of {budget.allocated:>8,d}")


@click.command("spending")
@click.pass_context
def show_spending(ctx):
    """Show how your expenses split across categories."""
    service = BudgetService(ctx.obj["db"])

    try:
        shares = service.spending_categories(ctx.obj["user"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nSpending by category:")
    click.echo("-" * 60)
    for share in shares:
        click.echo(f"{share.name:20s} | {share.percentage:3d}%")


@click.command("plan-budget")
@click.argument("total", metavar="TOTAL")
@click.option(
    "--allocate",
    "allocations",
    multiple=True,
    metavar="CATEGORY=AMOUNT",
    help="Amount allocated to a category (repeatable)",
)
@click.pass_context
def plan_budget(ctx, total: str, allocations: tuple[str, ...]):
    """Check a monthly budget plan.

    Examples:
        familybudget plan-budget 50000 --allocate Food=15000 --allocate Transport=8000
    """
    service = BudgetService(ctx.obj["db"])
    total_budget = parse_amount_or_exit(ctx, total, "total budget")

    category_allocations: dict[str, int] = {}
    for item in allocations:
        category, sep, amount = item.partition("=")
        if not sep or not category.strip():
            handle_domain_error(ctx, ValueError(f"Invalid allocation '{item}', expected CATEGORY=AMOUNT"))
        category_allocations[category.strip()] = parse_amount_or_exit(ctx, amount, f"amount for '{category}'")

    try:
        plan = service.plan_budget(ctx.obj["user"], total_budget, category_allocations)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Budget for {plan.period}: {plan.total_budget:,d}")
    for category, amount in plan.category_allocations.items():
        click.echo(f"  {category:20s} {amount:>10,d}")
    click.echo(f"Unallocated: {plan.unallocated:,d}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(show_summary)
    cli.add_command(show_spending)
    cli.add_command(plan_budget)
