"""Password hashing and verification for stored credentials."""

import logging

import bcrypt

from podcast_api.core.config import settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; longer passwords are rejected, never cut.
BCRYPT_MAX_BYTES = 72

PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = BCRYPT_MAX_BYTES


class HashingError(Exception):
    """Raised when bcrypt itself fails (not when a password is simply wrong)."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def password_fits_bcrypt(plain_password: str) -> bool:
    """True if the UTF-8 encoding is within bcrypt's 72-byte input limit."""
    return len(plain_password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def check_password_length(plain_password: str) -> str:
    """Raise ValueError for passwords outside 1 char .. 72 UTF-8 bytes; used by schemas and the CLI."""
    if len(plain_password) < PASSWORD_MIN_LEN:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LEN} character")
    if not password_fits_bcrypt(plain_password):
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes (UTF-8)")
    return plain_password


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.

    Raises ValueError for a password over 72 bytes; input validation rejects
    those before they get here.
    """
    if not password_fits_bcrypt(plain_password):
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes (UTF-8)")
    try:
        salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
        return bcrypt.hashpw(plain_password.encode("utf-8"), salt).decode("utf-8")
    except Exception as e:
        logger.exception("Password hashing failed")
        raise HashingError("Password hashing failed", cause=e) from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False on mismatch, on a malformed stored hash, and for a password
    too long to have been hashed. Raises HashingError if bcrypt fails for any
    other reason, so callers can tell a wrong password apart from a broken verifier.
    """
    if not hashed or not password_fits_bcrypt(plain_password):
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        logger.warning("Stored password hash is malformed; treating as mismatch")
        return False
    except Exception as e:
        logger.exception("Password verification failed")
        raise HashingError("Password verification failed", cause=e) from e
