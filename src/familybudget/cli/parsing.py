"""CLI helpers for parsing dates and amounts, exiting on bad input."""

from __future__ import annotations

from datetime import date

import click

from familybudget.cli.error_handling import handle_domain_error
from familybudget.utils.amount_parser import parse_amount
from familybudget.utils.date_parser import parse_date


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a CLI date, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as exc:
        handle_domain_error(ctx, ValueError(f"Invalid {label}: {exc}"))


def parse_amount_or_exit(ctx: click.Context, value: str, label: str = "amount") -> int:
    """Parse a CLI amount, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as exc:
        handle_domain_error(ctx, ValueError(f"Invalid {label}: {exc}"))
