"""Password reset service - request, verify and consume reset tokens."""

import asyncio
import time

from sqlalchemy.ext.asyncio import AsyncSession

from src.events_api.core.cache import UsedResetTokenStore
from src.events_api.core.logging import get_logger
from src.events_api.core.notifications import send_password_reset_email
from src.events_api.core.security import (
    TokenIdentity,
    TokenIssuer,
    hash_password,
    identity_from_claims,
)
from src.events_api.repositories import UserRepository
from src.events_api.services.auth_service import normalize_email

logger = get_logger(__name__)


class PasswordResetService:
    """Reset tokens are JWTs; nothing is stored when they are issued.

    With single-use enabled, a token that has changed a password is recorded
    until it would have expired anyway.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session: AsyncSession,
        issuer: TokenIssuer,
        used_tokens: UsedResetTokenStore,
        single_use: bool = True,
    ):
        self.user_repo = user_repo
        self.session = session
        self.issuer = issuer
        self.used_tokens = used_tokens
        self.single_use = single_use

    async def request_reset(self, email: str) -> bool | None:
        """Email a reset link to the account owner.

        Returns:
            None if no account has this email, otherwise whether the email
            was delivered
        """
        user = await self.user_repo.get_by_email(normalize_email(email))
        if user is None or user.id is None:
            return None

        token = self.issuer.issue_reset(TokenIdentity(id=user.id, email=user.email))
        sent = await asyncio.to_thread(send_password_reset_email, user.email, token)
        if sent:
            logger.info("Password reset requested", user_id=user.id)
        return sent

    async def _valid_claims(self, token: str) -> tuple[TokenIdentity, int] | None:
        """Identity and expiry of a usable reset token, or None."""
        claims = self.issuer.decode_reset(token)
        if claims is None:
            return None
        identity = identity_from_claims(claims)
        if identity is None:
            return None
        if self.single_use and await self.used_tokens.is_used(token):
            return None
        return identity, int(claims["exp"])

    async def verify_reset(self, token: str) -> bool:
        """Check a reset token without consuming it."""
        return await self._valid_claims(token) is not None

    async def set_new_password(self, token: str, password: str) -> bool:
        """Overwrite the password of the token's user.

        Returns False if the token is invalid, expired, already used, or its
        user no longer exists.
        """
        valid = await self._valid_claims(token)
        if valid is None:
            return False
        identity, expires_at = valid

        # Claim before writing; a token changes at most one password
        if self.single_use and not await self.used_tokens.mark_used(
            token, ttl=expires_at - int(time.time())
        ):
            return False

        try:
            updated = await self.user_repo.set_password(identity.id, hash_password(password))
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            if self.single_use:
                await self.used_tokens.release(token)
            raise

        if updated:
            logger.info("Password reset completed", user_id=identity.id)
        return updated
