"""Password hashing with werkzeug's salted scrypt."""

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return generate_password_hash(password, method="scrypt")


def compare_passwords(supplied: str, stored: str) -> bool:
    """Check a plain password against a stored hash.

    Malformed stored values never match.
    """
    return check_password_hash(stored, supplied)
