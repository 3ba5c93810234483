"""Security utilities - password hashing and signed tokens.

Re-exports all security-related functions for convenience.
"""

from src.events_api.core.security.crypto import (
    dummy_password_hash,
    hash_password,
    hash_token,
    verify_password,
)
from src.events_api.core.security.tokens import (
    TokenIdentity,
    TokenIssuer,
    TokenType,
    identity_from_claims,
)

__all__ = [
    # Crypto
    "dummy_password_hash",
    "hash_password",
    "hash_token",
    "verify_password",
    # Tokens
    "TokenIdentity",
    "TokenIssuer",
    "TokenType",
    "identity_from_claims",
]
