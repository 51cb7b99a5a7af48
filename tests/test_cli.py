"""Tests for CLI commands against the demo family."""

import pytest

from familybudget.cli.main import cli


@pytest.fixture(params=["memory", "sqlalchemy"])
def backend(request):
    """Run each CLI test on every store backend."""
    return request.param


def _invoke(cli_runner, backend, *args):
    return cli_runner.invoke(cli, ["--backend", backend, *args])


def test_help_does_not_need_a_store(cli_runner):
    """Test that --help works without a subcommand."""
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "transaction" in result.output
    assert "savings" in result.output


def test_summary(cli_runner, backend):
    """Test the dashboard of the demo family."""
    result = _invoke(cli_runner, backend, "summary")

    assert result.exit_code == 0
    assert "Budget for" in result.output
    assert "57,000" in result.output
    assert "Summer vacation" in result.output
    assert "Mandatory payments" in result.output


def test_spending(cli_runner, backend):
    """Test the category split of the demo user."""
    result = _invoke(cli_runner, backend, "spending")

    assert result.exit_code == 0
    assert "Entertainment" in result.output
    assert "Food" in result.output


def test_plan_budget(cli_runner, backend):
    """Test a valid budget plan."""
    result = _invoke(
        cli_runner, backend, "plan-budget", "50,000", "--allocate", "Food=20000", "--allocate", "Transport=5000"
    )

    assert result.exit_code == 0
    assert "50,000" in result.output
    assert "Unallocated: 25,000" in result.output


def test_plan_budget_over_allocated(cli_runner, backend):
    """Test that allocations above the total fail."""
    result = _invoke(cli_runner, backend, "plan-budget", "1000", "--allocate", "Food=2000")

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "exceeds" in result.output


def test_plan_budget_malformed_allocation(cli_runner, backend):
    """Test allocation syntax errors."""
    result = _invoke(cli_runner, backend, "plan-budget", "1000", "--allocate", "Food")

    assert result.exit_code == 1
    assert "expected CATEGORY=AMOUNT" in result.output


def test_transaction_list(cli_runner, backend):
    """Test listing the demo transactions."""
    result = _invoke(cli_runner, backend, "transaction", "list")

    assert result.exit_code == 0
    assert "Groceries" in result.output
    assert "Salary" in result.output
    assert result.output.index("Groceries") < result.output.index("Family cinema night")


def test_transaction_add(cli_runner, backend):
    """Test recording an expense."""
    result = _invoke(
        cli_runner,
        backend,
        "transaction",
        "add",
        "--description",
        "Bus pass",
        "--amount",
        "1,500",
        "--category",
        "Transport",
        "--date",
        "2024-05-15",
    )

    assert result.exit_code == 0
    assert "Recorded expense (ID: 4)" in result.output
    assert "-1,500" in result.output
    assert "2024-05-15" in result.output


@pytest.mark.parametrize(
    "amount,message",
    [("abc", "Invalid amount"), ("0", "Amount must be at least 1"), ("12.5", "whole number")],
)
def test_transaction_add_invalid_amount(cli_runner, backend, amount, message):
    """Test amount errors on the command line."""
    result = _invoke(
        cli_runner, backend, "transaction", "add", "--description", "Bus pass", "--amount", amount,
        "--category", "Transport",
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert message in result.output


def test_transaction_add_invalid_date(cli_runner, backend):
    """Test date errors on the command line."""
    result = _invoke(
        cli_runner, backend, "transaction", "add", "--description", "Bus pass", "--amount", "10",
        "--category", "Transport", "--date", "not a date",
    )

    assert result.exit_code == 1
    assert "Invalid date" in result.output


def test_transaction_delete(cli_runner, backend):
    """Test deleting existing and missing transactions."""
    result = _invoke(cli_runner, backend, "transaction", "delete", "1")
    assert result.exit_code == 0
    assert "Deleted transaction 1" in result.output

    result = _invoke(cli_runner, backend, "transaction", "delete", "99")
    assert result.exit_code == 1
    assert "Transaction 99 not found" in result.output


def test_savings_list_and_deposit(cli_runner, backend):
    """Test savings goal listing and a deposit."""
    result = _invoke(cli_runner, backend, "savings", "list")
    assert result.exit_code == 0
    assert "Summer vacation" in result.output
    assert "(25%)" in result.output

    result = _invoke(cli_runner, backend, "savings", "deposit", "1", "400")
    assert result.exit_code == 0
    assert "Deposit of 400 recorded" in result.output
    assert "25,400 / 100,000" in result.output


def test_savings_withdraw_insufficient(cli_runner, backend):
    """Test that overdrawing a goal fails."""
    result = _invoke(cli_runner, backend, "savings", "withdraw", "1", "30000")

    assert result.exit_code == 1
    assert "Insufficient funds" in result.output


def test_savings_history_empty(cli_runner, backend):
    """Test a goal without movements."""
    result = _invoke(cli_runner, backend, "savings", "history", "1")

    assert result.exit_code == 0
    assert "No history entries found." in result.output


def test_payment_commands(cli_runner, backend):
    """Test payment listing, creation and completion."""
    result = _invoke(cli_runner, backend, "payment", "list")
    assert result.exit_code == 0
    assert "Rent" in result.output
    assert "due" in result.output

    result = _invoke(
        cli_runner, backend, "payment", "add", "Internet", "900", "--due", "2024-06-01", "--category", "Utilities"
    )
    assert result.exit_code == 0
    assert "Created payment 'Internet' (ID: 2)" in result.output

    result = _invoke(cli_runner, backend, "payment", "complete", "1")
    assert result.exit_code == 0
    assert "paid" in result.output


def test_member_commands(cli_runner, backend):
    """Test family member and user listings."""
    result = _invoke(cli_runner, backend, "member", "list")
    assert result.exit_code == 0
    assert "Sam Smith" in result.output
    assert "user 1" in result.output

    result = _invoke(cli_runner, backend, "member", "add", "Grandma", "--relation", "Grandmother", "--age", "70")
    assert result.exit_code == 0
    assert "Added family member 'Grandma' (ID: 3)" in result.output

    result = _invoke(cli_runner, backend, "member", "users")
    assert result.exit_code == 0
    assert "demo" in result.output
    assert "Alex Smith" in result.output


def test_member_add_invalid_age(cli_runner, backend):
    """Test member validation errors."""
    result = _invoke(cli_runner, backend, "member", "add", "Grandma", "--relation", "Grandmother", "--age", "150")

    assert result.exit_code == 1
    assert "Age must be at most 120" in result.output


def test_notifications(cli_runner, backend):
    """Test that the welcome notification is unread."""
    result = _invoke(cli_runner, backend, "notifications", "--unread")

    assert result.exit_code == 0
    assert "* Welcome!" in result.output


def test_backend_from_environment(cli_runner):
    """Test that FAMILYBUDGET_BACKEND selects the backend."""
    result = cli_runner.invoke(cli, ["summary"], env={"FAMILYBUDGET_BACKEND": "sqlalchemy"})

    assert result.exit_code == 0
    assert "Summer vacation" in result.output


def test_unknown_backend(cli_runner):
    """Test backend validation."""
    result = cli_runner.invoke(cli, ["--backend", "postgres", "summary"])

    assert result.exit_code == 2
