from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.events_api.core.logging import get_logger
from src.events_api.models import UPDATABLE_PROFILE_FIELDS, User
from src.events_api.repositories import UserRepository
from src.events_api.services.auth_service import EmailAlreadyRegisteredError, normalize_email

logger = get_logger(__name__)

_email_adapter = TypeAdapter(EmailStr)


class UnknownProfileFieldError(ValueError):
    """The key is not one of the editable profile columns."""


class UserService:
    """User profile service."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def get_by_id(self, user_id: int) -> User | None:
        return await self.user_repo.get_by_id(user_id)

    async def update_field(self, user_id: int, key: str, value: str) -> bool:
        """Change one profile column.

        Returns:
            False if the user doesn't exist

        Raises:
            UnknownProfileFieldError: If ``key`` is not editable.
            EmailAlreadyRegisteredError: If the new email belongs to someone else.
            ValueError: If the new email is not a valid address.
        """
        if key not in UPDATABLE_PROFILE_FIELDS:
            raise UnknownProfileFieldError(f"Unknown field: {key}")

        if key == "email":
            try:
                value = normalize_email(str(_email_adapter.validate_python(value)))
            except ValidationError as e:
                raise ValueError("Invalid email address") from e
            existing = await self.user_repo.get_by_email(value)
            if existing is not None and existing.id != user_id:
                raise EmailAlreadyRegisteredError("Email already in use")

        try:
            updated = await self.user_repo.update_field(user_id, key, value)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise EmailAlreadyRegisteredError("Email already in use") from e
        except Exception:
            await self.session.rollback()
            raise

        if updated:
            logger.info("User profile updated", user_id=user_id, field=key)
        return updated
