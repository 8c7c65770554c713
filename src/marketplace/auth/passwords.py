"""Password hashing with bcrypt."""

import secrets
import string

import bcrypt

from marketplace.config import int_setting

_TEMP_PASSWORD_ALPHABET = string.ascii_lowercase + string.digits


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=int_setting("BCRYPT_ROUNDS", 12))
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def generate_temporary_password(length: int = 8) -> str:
    """Random password mailed to sellers created by an admin."""
    return "".join(secrets.choice(_TEMP_PASSWORD_ALPHABET) for _ in range(length))
