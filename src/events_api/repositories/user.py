"""Repository for User entity."""

from sqlalchemy import update
from sqlmodel import select

from src.events_api.models import User, utc_now
from src.events_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def update_field(self, user_id: int, field: str, value: str) -> bool:
        """Set a single column. The caller must check ``field`` against the allow-list.

        Returns:
            True if a row was updated
        """
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)  # type: ignore[arg-type]
            .values({field: value, "updated_at": utc_now()})
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def set_password(self, user_id: int, hashed_password: str) -> bool:
        """Overwrite the stored password hash. Returns True if a row was updated."""
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)  # type: ignore[arg-type]
            .values(hashed_password=hashed_password, updated_at=utc_now())
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]
