"""JWT issuing and decoding for access, refresh and reset tokens.

Each token kind is signed with its own secret and carries a ``type`` claim, so a
token of one kind is never accepted where another kind is expected.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt

from src.events_api.core.config import Settings


class TokenType:
    """Token type constants."""

    ACCESS = "access"
    REFRESH = "refresh"
    RESET = "reset"


@dataclass(frozen=True)
class TokenIdentity:
    """The identity embedded in every token: user id and email."""

    id: int
    email: str


def identity_from_claims(claims: dict[str, Any]) -> TokenIdentity | None:
    """Build a TokenIdentity from decoded claims. Returns None if malformed."""
    sub = claims.get("sub")
    email = claims.get("email")
    if not sub or not isinstance(email, str):
        return None
    try:
        return TokenIdentity(id=int(sub), email=email)
    except ValueError:
        return None


class TokenIssuer:
    """Mints and validates the three token kinds."""

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        reset_secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(hours=24),
        reset_ttl: timedelta = timedelta(hours=1),
    ):
        self._secrets = {
            TokenType.ACCESS: access_secret,
            TokenType.REFRESH: refresh_secret,
            TokenType.RESET: reset_secret,
        }
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.reset_ttl = reset_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            access_secret=settings.access_token_secret,
            refresh_secret=settings.refresh_token_secret,
            reset_secret=settings.reset_token_secret,
            algorithm=settings.jwt_algorithm,
            access_ttl=timedelta(hours=settings.access_token_expire_hours),
            reset_ttl=timedelta(minutes=settings.reset_token_expire_minutes),
        )

    def _encode(
        self,
        token_type: str,
        identity: TokenIdentity,
        expires_delta: timedelta | None,
        unique: bool,
    ) -> str:
        now = datetime.now(UTC)
        to_encode: dict[str, Any] = {
            "sub": str(identity.id),
            "email": identity.email,
            "type": token_type,
            "iat": now,
        }
        if expires_delta is not None:
            to_encode["exp"] = now + expires_delta
        if unique:
            # Two tokens minted in the same second for the same user must still differ
            to_encode["jti"] = uuid4().hex
        return jwt.encode(  # type: ignore[no-any-return]
            to_encode,
            self._secrets[token_type],
            algorithm=self.algorithm,
        )

    def issue_access(self, identity: TokenIdentity, expires_delta: timedelta | None = None) -> str:
        """Create an access token (24 hours by default)."""
        return self._encode(TokenType.ACCESS, identity, expires_delta or self.access_ttl, True)

    def issue_refresh(self, identity: TokenIdentity) -> str:
        """Create a refresh token.

        Carries no expiry claim: it stays valid until revoked from the session
        registry (or forever when session tracking is disabled).
        """
        return self._encode(TokenType.REFRESH, identity, None, True)

    def issue_reset(self, identity: TokenIdentity, expires_delta: timedelta | None = None) -> str:
        """Create a password reset token (1 hour by default)."""
        return self._encode(TokenType.RESET, identity, expires_delta or self.reset_ttl, True)

    def _decode(self, token: str, token_type: str) -> dict[str, Any] | None:
        """Decode and validate a token of the given kind. Returns None on any error."""
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                self._secrets[token_type],
                algorithms=[self.algorithm],
            )
        except JWTError:
            return None
        if claims.get("type") != token_type:
            return None
        return claims

    def decode_access(self, token: str) -> dict[str, Any] | None:
        return self._decode(token, TokenType.ACCESS)

    def decode_refresh(self, token: str) -> dict[str, Any] | None:
        return self._decode(token, TokenType.REFRESH)

    def decode_reset(self, token: str) -> dict[str, Any] | None:
        return self._decode(token, TokenType.RESET)
