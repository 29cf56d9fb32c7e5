"""Password hashing with bcrypt.

bcrypt only looks at the first 72 bytes of its input and recent releases
reject longer values, so request schemas cap passwords at 72 characters.
"""

import bcrypt


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
