"""Authentication service - registration, login, token refresh and logout."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.events_api.core.cache import SessionRegistry
from src.events_api.core.logging import get_logger
from src.events_api.core.security import (
    TokenIdentity,
    TokenIssuer,
    dummy_password_hash,
    hash_password,
    identity_from_claims,
    verify_password,
)
from src.events_api.models import User
from src.events_api.repositories import UserRepository
from src.events_api.schemas.auth import AuthResponse, RegisterRequest, TokenPairResponse

logger = get_logger(__name__)


class EmailAlreadyRegisteredError(ValueError):
    """The email belongs to another account."""


def normalize_email(email: str) -> str:
    return email.lower().strip()


class AuthService:
    """Credential checks plus the token lifecycle.

    When session tracking is enabled, every refresh token handed out is
    registered in the session registry, and only registered tokens can be
    exchanged. Registry failures propagate as SessionStoreUnavailableError
    so the caller never gets a token pair that the server can't honour.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        session: AsyncSession,
        issuer: TokenIssuer,
        registry: SessionRegistry,
        tracking_enabled: bool = True,
    ):
        self.user_repo = user_repo
        self.session = session
        self.issuer = issuer
        self.registry = registry
        self.tracking_enabled = tracking_enabled

    async def verify_credentials(self, email: str, password: str) -> TokenIdentity | None:
        """Return the identity for a matching email/password pair, None otherwise."""
        user = await self.user_repo.get_by_email(normalize_email(email))

        # Always verify a hash so response timing doesn't reveal whether the email exists
        password_hash = user.hashed_password if user else dummy_password_hash()
        password_valid = verify_password(password, password_hash)

        if user is None or user.id is None or not password_valid:
            return None
        return TokenIdentity(id=user.id, email=user.email)

    async def _issue_pair(self, identity: TokenIdentity) -> tuple[str, str]:
        access_token = self.issuer.issue_access(identity)
        refresh_token = self.issuer.issue_refresh(identity)
        if self.tracking_enabled:
            await self.registry.register(refresh_token)
        return access_token, refresh_token

    async def register(self, data: RegisterRequest) -> AuthResponse:
        """Create the account and log it in.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken.
        """
        email = normalize_email(str(data.email))
        if await self.user_repo.exists_by_email(email):
            raise EmailAlreadyRegisteredError("User already exists")

        user = User(
            email=email,
            hashed_password=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone_number=data.phone_number,
        )
        self.user_repo.add(user)

        try:
            # Flush for the id; the row is committed only once the session is registered
            await self.session.flush()
            identity = TokenIdentity(id=user.id, email=user.email)  # type: ignore[arg-type]
            access_token, refresh_token = await self._issue_pair(identity)
            await self.session.commit()
        except IntegrityError as e:
            # Unique constraint on email covers concurrent registrations
            await self.session.rollback()
            raise EmailAlreadyRegisteredError("User already exists") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("User registered", user_id=identity.id)
        return AuthResponse(
            id=identity.id,
            email=identity.email,
            access_token=access_token,
            refresh_token=refresh_token,
        )

    async def login(self, email: str, password: str) -> AuthResponse | None:
        """Returns None if the credentials don't match."""
        identity = await self.verify_credentials(email, password)
        if identity is None:
            logger.info("Login failed")
            return None

        access_token, refresh_token = await self._issue_pair(identity)
        logger.info("User logged in", user_id=identity.id)
        return AuthResponse(
            id=identity.id,
            email=identity.email,
            access_token=access_token,
            refresh_token=refresh_token,
        )

    async def refresh(self, refresh_token: str) -> TokenPairResponse | None:
        """Exchange a refresh token for a new pair (rotate-and-revoke).

        Returns None if the token is invalid or, with tracking enabled, no
        longer live. The old token is revoked before the new one is
        registered; if the revoke finds it already gone, another request
        rotated it first and this one is refused.
        """
        claims = self.issuer.decode_refresh(refresh_token)
        if claims is None:
            return None
        identity = identity_from_claims(claims)
        if identity is None:
            return None

        if self.tracking_enabled and not await self.registry.is_live(refresh_token):
            logger.info("Refresh with revoked token rejected", user_id=identity.id)
            return None

        new_access = self.issuer.issue_access(identity)
        new_refresh = self.issuer.issue_refresh(identity)

        if self.tracking_enabled:
            if not await self.registry.revoke(refresh_token):
                logger.warning("Concurrent refresh token reuse rejected", user_id=identity.id)
                return None
            await self.registry.register(new_refresh)

        return TokenPairResponse(access_token=new_access, refresh_token=new_refresh)

    async def logout(self, identity: TokenIdentity, refresh_token: str | None) -> None:
        """Revoke the supplied refresh token if it belongs to the caller.

        Without tracking (or without a token) there is nothing to revoke.
        """
        if not self.tracking_enabled or not refresh_token:
            return

        claims = self.issuer.decode_refresh(refresh_token)
        owner = identity_from_claims(claims) if claims else None
        if owner is None or owner.id != identity.id:
            logger.info("Logout with foreign or invalid refresh token ignored", user_id=identity.id)
            return

        revoked = await self.registry.revoke(refresh_token)
        logger.info("User logged out", user_id=identity.id, revoked=revoked)
