"""Password hashing with bcrypt."""

import bcrypt

DEFAULT_ROUNDS = 10


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a plaintext password into a self-salted bcrypt digest."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored digest.

    A malformed digest is treated as a mismatch.
    """
    try:
        return bcrypt.checkpw(password.encode(), hashed_password.encode())
    except ValueError:
        return False
