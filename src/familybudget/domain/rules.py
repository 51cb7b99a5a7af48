"""Validation and access checks shared by the domain services."""

import logging
import re
from enum import Enum
from typing import Optional, TypeVar

from familybudget.domain import errors
from familybudget.domain.entities import User
from familybudget.domain.errors import PermissionDeniedError, ValidationError

logger = logging.getLogger(__name__)

EnumT = TypeVar("EnumT", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 6


def require_family(actor: User) -> int:
    """Return the actor's family id.

    Raises:
        ValidationError: If the actor is not attached to a family
    """
    if actor.family_id is None:
        raise ValidationError(errors.no_family())
    return actor.family_id


def require_parent(actor: User) -> int:
    """Return the actor's family id, requiring the parent role.

    Raises:
        ValidationError: If the actor is not attached to a family
        PermissionDeniedError: If the actor is not a parent
    """
    family_id = require_family(actor)
    if not actor.is_parent:
        logger.warning("user %d denied parent-only operation", actor.id)
        raise PermissionDeniedError(errors.parent_required())
    return family_id


def require_same_family(actor: User, family_id: int, entity: str, entity_id: int) -> None:
    """Reject access to records of another family."""
    if require_family(actor) != family_id:
        logger.warning("user %d denied access to %s %d", actor.id, entity, entity_id)
        raise PermissionDeniedError(errors.not_in_family(entity, entity_id))


def require_text(value: Optional[str], field: str, min_length: int = 1) -> str:
    """Return the stripped text, enforcing a minimum length."""
    text = (value or "").strip()
    if len(text) < min_length:
        raise ValidationError(errors.min_length(field, min_length))
    return text


def require_password(value: Optional[str], field: str = "Password") -> str:
    """Return the password unchanged, enforcing the minimum length."""
    if len(value or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(errors.min_length(field, MIN_PASSWORD_LENGTH))
    return value


def require_amount(value: int, field: str, minimum: int = 1) -> int:
    """Return an integer amount, enforcing a lower bound."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be a whole number")
    if value < minimum:
        raise ValidationError(errors.min_value(field, minimum))
    return value


def require_email(value: Optional[str]) -> str:
    """Return a normalised email address."""
    email = (value or "").strip()
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"Invalid email address '{email}'")
    return email


def require_choice(enum_type: type[EnumT], value: object, field: str) -> EnumT:
    """Coerce a raw value into an enum member."""
    try:
        return enum_type(value)
    except ValueError:
        choices = [member.value for member in enum_type]
        raise ValidationError(errors.invalid_choice(field, value, choices)) from None
