"""Password hashing for recycler accounts, backed by argon2-cffi."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher()

# Verified against when the email is unknown so login timing does not reveal
# whether an account exists.
DUMMY_PASSWORD_HASH = _hasher.hash("wastelink-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password.

    Example:
        >>> hash_password("S3cret!").startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a stored hash.

    Returns False for a mismatch or a malformed hash.
    """
    try:
        return _hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False
