"""Family member domain service."""

import logging
from typing import Optional

from familybudget.database.base import Database
from familybudget.domain import errors
from familybudget.domain.entities import FamilyMember, FamilyMemberUpdate, User
from familybudget.domain.errors import NotFoundError, ValidationError
from familybudget.domain.rules import (
    require_amount,
    require_family,
    require_parent,
    require_same_family,
    require_text,
)

logger = logging.getLogger(__name__)

MAX_AGE = 120


def _require_age(age: int) -> int:
    age = require_amount(age, "Age", 0)
    if age > MAX_AGE:
        raise ValidationError(f"Age must be at most {MAX_AGE}")
    return age


class FamilyMemberService:
    """Service for the people listed in a family (with or without a user account)."""

    def __init__(self, db: Database):
        """Initialize family member service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_members(self, actor: User) -> list[FamilyMember]:
        """List the members of the actor's family."""
        return self.db.get_family_members(require_family(actor))

    def get_member(self, actor: User, member_id: int) -> FamilyMember:
        """Get a member of the actor's family."""
        member = self.db.get_family_member(member_id)
        if member is None:
            raise NotFoundError(errors.not_found("Family member", member_id))
        require_same_family(actor, member.family_id, "family member", member_id)
        return member

    def create_member(
        self,
        actor: User,
        name: str,
        relation: str,
        age: int,
        user_id: Optional[int] = None,
    ) -> FamilyMember:
        """Add a member to the actor's family (parents only).

        Raises:
            PermissionDeniedError: If the actor is not a parent
            ValidationError: If a field is invalid or the linked user is not in the family
        """
        family_id = require_parent(actor)
        member = self.db.create_family_member(
            name=require_text(name, "Name", 2),
            relation=require_text(relation, "Relation"),
            age=_require_age(age),
            user_id=self._check_linked_user(family_id, user_id),
            family_id=family_id,
        )
        logger.info("user %d added family member %d", actor.id, member.id)
        return member

    def update_member(
        self,
        actor: User,
        member_id: int,
        name: Optional[str] = None,
        relation: Optional[str] = None,
        age: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> FamilyMember:
        """Update a member of the actor's family (parents only)."""
        family_id = require_parent(actor)
        with self.db.atomic():
            self.get_member(actor, member_id)
            update = FamilyMemberUpdate(
                name=None if name is None else require_text(name, "Name", 2),
                relation=None if relation is None else require_text(relation, "Relation"),
                age=None if age is None else _require_age(age),
                user_id=self._check_linked_user(family_id, user_id),
            )
            updated = self.db.update_family_member(member_id, update)
        if updated is None:
            raise NotFoundError(errors.not_found("Family member", member_id))
        return updated

    def delete_member(self, actor: User, member_id: int) -> None:
        """Remove a member of the actor's family (parents only)."""
        require_parent(actor)
        with self.db.atomic():
            self.get_member(actor, member_id)
            self.db.delete_family_member(member_id)
        logger.info("user %d removed family member %d", actor.id, member_id)

    def _check_linked_user(self, family_id: int, user_id: Optional[int]) -> Optional[int]:
        if user_id is None:
            return None
        user = self.db.get_user(user_id)
        if user is None or user.family_id != family_id:
            raise ValidationError(f"User {user_id} is not a member of family {family_id}")
        return user_id
