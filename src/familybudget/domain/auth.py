"""Registration and login domain service."""

import logging
from typing import Optional

from familybudget.database.base import Database
from familybudget.domain import errors
from familybudget.domain.entities import User, UserRole
from familybudget.domain.errors import AuthenticationError, ConflictError
from familybudget.domain.notification import NotificationService
from familybudget.domain.rules import require_email, require_password, require_text
from familybudget.utils.passwords import compare_passwords, hash_password

logger = logging.getLogger(__name__)

WELCOME_TITLE = "Welcome!"
REGISTERED_MESSAGE = (
    'You have successfully registered in "Family Budget". '
    "You can now add your family members."
)
RESET_SENT_MESSAGE = "If this email is registered, password reset instructions have been sent to it."
LOGIN_FAILED_MESSAGE = "Invalid username or password"


class AuthService:
    """Service for registering family founders and checking credentials."""

    def __init__(self, db: Database):
        """Initialize auth service.

        Args:
            db: Database instance
        """
        self.db = db
        self.notifications = NotificationService(db)

    def register(
        self,
        username: str,
        password: str,
        email: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        family_name: Optional[str] = None,
    ) -> User:
        """Register a new user as the founding parent of a new family.

        Args:
            username: Unique login name
            password: Plain password (stored hashed)
            email: Unique email address
            first_name: Optional first name
            last_name: Optional last name
            family_name: Family name; defaults to "<last name or username> family"

        Returns:
            The created parent user

        Raises:
            ValidationError: If a required field is missing or malformed
            ConflictError: If the username or email is already taken
        """
        username = require_text(username, "Username")
        require_password(password)
        email = require_email(email)

        with self.db.atomic():
            if self.db.get_user_by_username(username) is not None:
                raise ConflictError(errors.username_taken(username))
            if self.db.get_user_by_email(email) is not None:
                raise ConflictError(errors.email_taken(email))

            name = (family_name or "").strip() or f"{last_name or username} family"
            family = self.db.create_family(name)
            user = self.db.create_user(
                username=username,
                password=hash_password(password),
                email=email,
                role=UserRole.PARENT,
                family_id=family.id,
                first_name=first_name,
                last_name=last_name,
            )

        self.notifications.notify(user.id, WELCOME_TITLE, REGISTERED_MESSAGE)
        logger.info("registered user %d as founder of family %d", user.id, family.id)
        return user

    def login(self, username: str, password: str) -> User:
        """Return the user matching the credentials.

        Raises:
            AuthenticationError: If the username is unknown or the password is wrong
        """
        user = self.db.get_user_by_username(username)
        if user is None or not compare_passwords(password, user.password):
            logger.warning("failed login for '%s'", username)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)
        return user

    def forgot_password(self, email: str) -> str:
        """Start a password reset.

        The same message is returned whether or not the email is known, so
        the answer does not reveal registered addresses. No email is sent.
        """
        if self.db.get_user_by_email(email.strip()) is not None:
            logger.info("password reset requested for a registered email")
        return RESET_SENT_MESSAGE
