"""Password hashing for stored credentials."""

import bcrypt

# Min/max lengths for password validation.
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# bcrypt input limit; longer passwords are rejected, never truncated.
BCRYPT_MAX_BYTES = 72


def password_fits_bcrypt(plain_password: str) -> bool:
    """True if the UTF-8 encoding of plain_password is within bcrypt's input limit."""
    return len(plain_password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def hash_password(plain_password: str, rounds: int) -> str:
    """Hash a plain-text password for storage. Raises ValueError if it exceeds 72 bytes."""
    if not password_fits_bcrypt(plain_password):
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Over-long passwords never verify."""
    if not password_fits_bcrypt(plain_password):
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
