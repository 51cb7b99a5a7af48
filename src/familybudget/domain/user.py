"""User domain service."""

import logging
from typing import Optional

from familybudget.database.base import Database
from familybudget.domain import errors
from familybudget.domain.entities import User, UserRole, UserUpdate
from familybudget.domain.errors import AuthenticationError, ConflictError, NotFoundError
from familybudget.domain.notification import NotificationService
from familybudget.domain.rules import (
    require_choice,
    require_email,
    require_family,
    require_parent,
    require_password,
    require_text,
)
from familybudget.utils.passwords import compare_passwords, hash_password

logger = logging.getLogger(__name__)

ADDED_TITLE = "Welcome!"
ADDED_MESSAGE = "You have been added to the family. Welcome to the family budget!"


class UserService:
    """Service for managing the user accounts of a family."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db
        self.notifications = NotificationService(db)

    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID.

        Returns:
            User entity or None if not found
        """
        return self.db.get_user(user_id)

    def list_family_users(self, actor: User) -> list[User]:
        """List every user account of the actor's family."""
        return self.db.get_users_by_family_id(require_family(actor))

    def add_family_user(
        self,
        actor: User,
        username: str,
        password: str,
        email: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        role: UserRole | str = UserRole.USER,
    ) -> User:
        """Add a user account to the actor's family.

        Only parents may add users, and a family holds at most two parents.
        The cap is checked and the user created under one store lock, so two
        concurrent requests cannot both pass the check.

        Raises:
            PermissionDeniedError: If the actor is not a parent
            ValidationError: If a field is missing or malformed
            ConflictError: If the username or email is taken, or the parent cap is reached
        """
        family_id = require_parent(actor)
        username = require_text(username, "Username")
        require_password(password)
        email = require_email(email)
        role = require_choice(UserRole, role, "role")

        with self.db.atomic():
            if self.db.get_user_by_username(username) is not None:
                raise ConflictError(errors.username_taken(username))
            if self.db.get_user_by_email(email) is not None:
                raise ConflictError(errors.email_taken(email))

            if role == UserRole.PARENT:
                parents = self.db.get_users_by_role(family_id, UserRole.PARENT)
                if len(parents) >= errors.MAX_PARENTS_PER_FAMILY:
                    logger.warning("parent cap reached for family %d", family_id)
                    raise ConflictError(errors.parent_cap_reached(family_id))

            user = self.db.create_user(
                username=username,
                password=hash_password(password),
                email=email,
                role=role,
                family_id=family_id,
                first_name=first_name,
                last_name=last_name,
            )

        self.notifications.notify(user.id, ADDED_TITLE, ADDED_MESSAGE)
        logger.info("user %d added user %d (%s) to family %d", actor.id, user.id, role.value, family_id)
        return user

    def update_profile(
        self,
        actor: User,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """Update the actor's own profile fields.

        Raises:
            ValidationError: If the email is malformed
            ConflictError: If the email belongs to another user
        """
        with self.db.atomic():
            if email is not None:
                email = require_email(email)
                owner = self.db.get_user_by_email(email)
                if owner is not None and owner.id != actor.id:
                    raise ConflictError(errors.email_taken(email))

            updated = self.db.update_user(
                actor.id, UserUpdate(first_name=first_name, last_name=last_name, email=email)
            )
        if updated is None:
            raise NotFoundError(errors.not_found("User", actor.id))
        return updated

    def change_password(self, actor: User, current_password: str, new_password: str) -> User:
        """Replace the actor's password after checking the current one.

        Raises:
            AuthenticationError: If the current password does not match
            ValidationError: If the new password is too short
        """
        stored = self.db.get_user(actor.id)
        if stored is None:
            raise NotFoundError(errors.not_found("User", actor.id))
        if not compare_passwords(current_password, stored.password):
            raise AuthenticationError("Current password is incorrect")
        require_password(new_password, "New password")

        updated = self.db.update_user(actor.id, UserUpdate(password=hash_password(new_password)))
        logger.info("user %d changed password", actor.id)
        return updated
