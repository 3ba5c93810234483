"""Password hashing (Argon2id) and token fingerprints."""

from functools import lru_cache
from hashlib import sha256
from secrets import token_hex

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from src.events_api.core.config import get_settings


@lru_cache
def _hasher() -> PasswordHasher:
    settings = get_settings()
    return PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


@lru_cache
def dummy_password_hash() -> str:
    """Hash of a random secret, verified when an email is unknown.

    Login then costs the same whether or not the account exists.
    """
    return _hasher().hash(token_hex(16))


def hash_password(password: str) -> str:
    return _hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Constant-time check. A malformed stored hash counts as a mismatch."""
    try:
        return _hasher().verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


def hash_token(token: str) -> str:
    """SHA-256 fingerprint under which token state is kept in Redis."""
    return sha256(token.encode()).hexdigest()
