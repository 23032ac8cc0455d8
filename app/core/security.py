"""Password hashing and random secret helpers."""

import secrets

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt ignores everything past 72 bytes; request schemas cap passwords there.
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Check a password against a stored hash.

    Accounts created through OTP have no password; they never match.
    """
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def generate_reset_token() -> str:
    """Return a 40-character hex token for password reset links."""
    return secrets.token_hex(20)


def generate_numeric_code(length: int = 6) -> str:
    """Return a uniformly random numeric code without a leading zero.

    For length 6 the range is 100000-999999.
    """
    low = 10 ** (length - 1)
    high = 10**length
    return str(low + secrets.randbelow(high - low))
