"""Password hashing helpers."""

import bcrypt

from users_api.config import get_settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plaintext password with a fresh bcrypt salt."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False
