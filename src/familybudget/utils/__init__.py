"""Utility functions for familybudget."""

from familybudget.utils.date_parser import parse_date, period_label
from familybudget.utils.amount_parser import parse_amount
from familybudget.utils.passwords import hash_password, compare_passwords

__all__ = ["parse_date", "period_label", "parse_amount", "hash_password", "compare_passwords"]
