"""
Logistics Back Office Security Utilities

Password hashing and the closed set of user roles.
"""

from passlib.context import CryptContext

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

VALID_ROLES = ("admin", "coordinator", "driver")
DEFAULT_ROLE = "driver"


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes never verify."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def is_valid_role(role: str | None) -> bool:
    return role in VALID_ROLES
