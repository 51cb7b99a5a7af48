"""Main CLI entry point."""

import logging

import click

from familybudget.database.factories import BACKENDS, create_database
from familybudget.domain.demo import seed_demo_data

# Import and register all commands at module level
from familybudget.cli.commands import (
    member,
    notification,
    payment,
    savings,
    summary,
    transaction,
)


@click.group()
@click.option(
    "--backend",
    type=click.Choice(BACKENDS, case_sensitive=False),
    default="memory",
    show_default=True,
    help="Store implementation (overrides FAMILYBUDGET_BACKEND environment variable)",
    envvar="FAMILYBUDGET_BACKEND",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level (overrides FAMILYBUDGET_LOG_LEVEL environment variable)",
    envvar="FAMILYBUDGET_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, backend: str, log_level: str):
    """Family budget - shared transactions, savings goals and mandatory payments.

    All data is kept in memory. Each invocation starts from the demo family
    and acts as its parent; changes are shown but not kept.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Build the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(backend)
        ctx.obj["db"] = db
        ctx.obj["user"] = seed_demo_data(db)
        ctx.call_on_close(db.disconnect)


# Register all commands
summary.register_commands(cli)
transaction.register_commands(cli)
savings.register_commands(cli)
payment.register_commands(cli)
member.register_commands(cli)
notification.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
