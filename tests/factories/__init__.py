from tests.factories.event import EventFactory
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory

__all__ = [
    "DEFAULT_TEST_PASSWORD",
    "EventFactory",
    "UserFactory",
]
