"""Tests for mandatory payments."""

from datetime import date

import pytest

from familybudget.domain.errors import PermissionDeniedError, ValidationError


@pytest.fixture
def rent(payment_service, parent):
    """Create a rent payment for the parent's family."""
    return payment_service.create_payment(
        parent, name="Rent", amount=30000, due_date=date(2024, 6, 1), category="Housing"
    )


def test_create_payment(rent, parent):
    """Test payment defaults."""
    assert rent.is_completed is False
    assert rent.family_id == parent.family_id
    assert rent.due_date == date(2024, 6, 1)


def test_create_payment_validation(payment_service, parent):
    """Test payment field validation."""
    with pytest.raises(ValidationError):
        payment_service.create_payment(
            parent, name="Rent", amount=0, due_date=date(2024, 6, 1), category="Housing"
        )
    with pytest.raises(ValidationError):
        payment_service.create_payment(
            parent, name="", amount=10, due_date=date(2024, 6, 1), category="Housing"
        )


def test_child_cannot_create_payment(payment_service, child):
    """Test that payments are managed by parents only."""
    with pytest.raises(PermissionDeniedError):
        payment_service.create_payment(
            child, name="Phone", amount=500, due_date=date(2024, 6, 1), category="Bills"
        )


def test_child_can_list_payments(payment_service, child, rent):
    """Test that every family member sees the payments."""
    assert payment_service.list_payments(child) == [rent]


def test_complete_and_reopen(payment_service, parent, rent):
    """Test toggling completion both ways."""
    assert payment_service.set_completed(parent, rent.id).is_completed is True
    assert payment_service.set_completed(parent, rent.id, completed=False).is_completed is False


def test_update_payment(payment_service, parent, rent):
    """Test partial payment update."""
    updated = payment_service.update_payment(parent, rent.id, amount=32000)

    assert updated.amount == 32000
    assert updated.name == "Rent"


def test_delete_payment(payment_service, parent, outsider, rent):
    """Test payment deletion and family scoping."""
    with pytest.raises(PermissionDeniedError):
        payment_service.delete_payment(outsider, rent.id)

    payment_service.delete_payment(parent, rent.id)
    assert payment_service.list_payments(parent) == []
