"""Tests for owner-scoped data access (src/events_api/repositories)."""

from datetime import datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.events_api.core.security import verify_password
from src.events_api.models import Event, User
from src.events_api.repositories import EventRepository, UserRepository
from tests.factories import DEFAULT_TEST_PASSWORD, EventFactory, UserFactory

pytestmark = pytest.mark.unit


@pytest.fixture
async def users(db_session: AsyncSession) -> tuple[User, User]:
    owner, other = UserFactory.build(), UserFactory.build()
    db_session.add_all([owner, other])
    await db_session.commit()
    return owner, other


class TestUserRepository:
    async def test_get_by_email(self, db_session: AsyncSession, users: tuple[User, User]) -> None:
        owner, _ = users
        repo = UserRepository(db_session)

        found = await repo.get_by_email(owner.email)

        assert found is not None
        assert found.id == owner.id
        assert verify_password(DEFAULT_TEST_PASSWORD, found.hashed_password)
        assert await repo.exists_by_email("missing@example.com") is False

    async def test_update_field(self, db_session: AsyncSession, users: tuple[User, User]) -> None:
        owner_id = users[0].id
        repo = UserRepository(db_session)

        assert await repo.update_field(owner_id, "first_name", "Augusta") is True
        await db_session.commit()
        db_session.expire_all()

        refreshed = await repo.get_by_id(owner_id)
        assert refreshed is not None
        assert refreshed.first_name == "Augusta"

    async def test_update_missing_user(self, db_session: AsyncSession) -> None:
        assert await UserRepository(db_session).set_password(9999, "hash") is False


class TestEventRepository:
    async def test_scoped_to_owner(
        self, db_session: AsyncSession, users: tuple[User, User]
    ) -> None:
        owner, other = users
        mine = EventFactory.starting_at(owner.id, datetime(2024, 3, 15, 9))
        theirs = EventFactory.starting_at(other.id, datetime(2024, 3, 15, 9))
        db_session.add_all([mine, theirs])
        await db_session.commit()
        repo = EventRepository(db_session)

        assert [e.id for e in await repo.list_for_owner(owner.id)] == [mine.id]
        assert await repo.get_for_owner(theirs.id, owner.id) is None
        assert await repo.delete_for_owner(theirs.id, owner.id) is False
        assert await repo.update_for_owner(theirs.id, owner.id, {"name": "x"}) is False

    async def test_between_is_half_open(
        self, db_session: AsyncSession, users: tuple[User, User]
    ) -> None:
        owner, _ = users
        db_session.add_all(
            [
                EventFactory.starting_at(owner.id, datetime(2024, 3, 15, 0, 0), name="midnight"),
                EventFactory.starting_at(owner.id, datetime(2024, 3, 15, 23, 59), name="late"),
                EventFactory.starting_at(owner.id, datetime(2024, 3, 16, 0, 0), name="next day"),
            ]
        )
        await db_session.commit()

        events = await EventRepository(db_session).list_for_owner_between(
            owner.id,
            datetime(2024, 3, 15),
            datetime(2024, 3, 16),
        )

        assert [e.name for e in events] == ["midnight", "late"]


class TestTimestampColumns:
    @pytest.mark.parametrize(
        "column",
        [
            User.__table__.c.created_at,
            User.__table__.c.updated_at,
            Event.__table__.c.from_date,
            Event.__table__.c.to_date,
        ],
    )
    def test_columns_are_naive(self, column) -> None:
        assert column.type.timezone is False

    async def test_naive_utc_round_trip(self, db_session: AsyncSession) -> None:
        user = UserFactory.build()
        db_session.add(user)
        await db_session.commit()

        stored = await UserRepository(db_session).get_by_email(user.email)

        assert stored is not None
        assert stored.created_at.tzinfo is None
