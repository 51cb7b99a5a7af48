"""Tests for family user management."""

import pytest

from familybudget.domain.entities import UserRole
from familybudget.domain.errors import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)
from familybudget.domain.user import ADDED_MESSAGE


def test_add_family_user(user_service, parent, child, db):
    """Test that a parent adds a user to their own family."""
    assert child.family_id == parent.family_id
    assert child.role == UserRole.USER
    assert [n.message for n in db.get_notifications(child.id)] == [ADDED_MESSAGE]
    assert [u.id for u in user_service.list_family_users(parent)] == [parent.id, child.id]


def test_add_family_user_requires_parent(user_service, child):
    """Test that regular users cannot add users."""
    with pytest.raises(PermissionDeniedError):
        user_service.add_family_user(
            child, username="new", password="pw1234", email="new@example.com"
        )


def test_add_family_user_accepts_role_string(user_service, parent):
    """Test that the role may be given by value."""
    second = user_service.add_family_user(
        parent, username="ivan", password="pw1234", email="ivan@example.com", role="parent"
    )

    assert second.role == UserRole.PARENT


def test_add_family_user_rejects_unknown_role(user_service, parent):
    """Test role validation."""
    with pytest.raises(ValidationError, match="Invalid role"):
        user_service.add_family_user(
            parent, username="ivan", password="pw1234", email="ivan@example.com", role="admin"
        )


def test_add_family_user_duplicate_username(user_service, parent, child):
    """Test that usernames stay unique across families."""
    with pytest.raises(ConflictError):
        user_service.add_family_user(
            parent, username="kolya", password="pw1234", email="kolya2@example.com"
        )


def test_third_parent_rejected(user_service, parent, db):
    """Test the two-parent cap enforced on adding users."""
    user_service.add_family_user(
        parent, username="ivan", password="pw1234", email="ivan@example.com", role=UserRole.PARENT
    )

    with pytest.raises(ConflictError, match="already has 2 parents"):
        user_service.add_family_user(
            parent, username="olga", password="pw1234", email="olga@example.com", role=UserRole.PARENT
        )

    assert db.get_user_by_username("olga") is None
    assert len(db.get_users_by_role(parent.family_id, UserRole.PARENT)) == 2


def test_parent_cap_leaves_regular_users_alone(user_service, parent):
    """Test that regular users can still be added at the cap."""
    user_service.add_family_user(
        parent, username="ivan", password="pw1234", email="ivan@example.com", role=UserRole.PARENT
    )

    added = user_service.add_family_user(
        parent, username="masha", password="pw1234", email="masha@example.com"
    )

    assert added.role == UserRole.USER


def test_update_profile(user_service, child):
    """Test updating the actor's own profile."""
    updated = user_service.update_profile(child, last_name="Petrov", email="k@example.com")

    assert updated.last_name == "Petrov"
    assert updated.first_name == "Kolya"
    assert updated.email == "k@example.com"


def test_update_profile_email_conflict(user_service, parent, child):
    """Test that the email cannot be taken from another user."""
    with pytest.raises(ConflictError):
        user_service.update_profile(child, email="anna@example.com")

    # Keeping one's own email is fine
    assert user_service.update_profile(child, email="kolya@example.com").email == "kolya@example.com"


def test_change_password(user_service, auth_service, child):
    """Test password change and login with the new password."""
    user_service.change_password(child, "secret-2", "new-secret")

    assert auth_service.login("kolya", "new-secret").id == child.id
    with pytest.raises(AuthenticationError):
        auth_service.login("kolya", "secret-2")


def test_change_password_wrong_current(user_service, child):
    """Test that the current password must match."""
    with pytest.raises(AuthenticationError):
        user_service.change_password(child, "wrong", "new-secret")


def test_change_password_too_short(user_service, child):
    """Test the minimum new password length."""
    with pytest.raises(ValidationError, match="at least 6"):
        user_service.change_password(child, "secret-2", "abc")


def test_add_family_user_password_too_short(user_service, parent):
    """Test that added users need a password of at least 6 characters."""
    with pytest.raises(ValidationError, match="Password must be at least 6"):
        user_service.add_family_user(
            parent, username="ivan", password="x", email="ivan@example.com"
        )
