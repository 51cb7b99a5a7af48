"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or the parent cap."""


class PermissionDeniedError(DomainError):
    """Acting user is not allowed to perform the operation."""


class AuthenticationError(DomainError):
    """Credentials did not match a known user."""


class InsufficientFundsError(ValidationError):
    """Withdrawal exceeds the savings goal balance."""


MAX_PARENTS_PER_FAMILY = 2


def not_found(entity: str, entity_id: int) -> str:
    """Return message for a missing record."""
    return f"{entity} {entity_id} not found"


def username_taken(username: str) -> str:
    """Return message for a duplicate username."""
    return f"Username '{username}' is already taken"


def email_taken(email: str) -> str:
    """Return message for a duplicate email."""
    return f"Email '{email}' is already in use"


def parent_cap_reached(family_id: int) -> str:
    """Return message when a family already has the maximum number of parents."""
    return (
        f"Family {family_id} already has {MAX_PARENTS_PER_FAMILY} parents, "
        "no more can be added"
    )


def parent_required() -> str:
    """Return message for parent-only operations."""
    return "Access denied: parent role required"


def not_in_family(entity: str, entity_id: int) -> str:
    """Return message when a record belongs to another family."""
    return f"Access denied: {entity} {entity_id} belongs to another family"


def no_family() -> str:
    """Return message for users not attached to a family."""
    return "User does not belong to any family"


def insufficient_funds(goal_id: int, balance: int, amount: int) -> str:
    """Return message for a withdrawal above the goal balance."""
    return f"Insufficient funds in savings goal {goal_id}: balance {balance}, requested {amount}"


def min_length(field: str, length: int) -> str:
    """Return message for a too-short text field."""
    return f"{field} must be at least {length} character{'s' if length != 1 else ''}"


def min_value(field: str, value: int) -> str:
    """Return message for a numeric field below its minimum."""
    return f"{field} must be at least {value}"


def invalid_choice(field: str, value: object, choices: list[str]) -> str:
    """Return message for a value outside an enumeration."""
    return f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}"
