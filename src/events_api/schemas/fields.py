"""Field types and validators shared by request and response schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import PlainSerializer, StringConstraints
from zxcvbn import zxcvbn

from src.events_api.core.dates import as_utc

# zxcvbn scores run 0-4; 3 is "safely unguessable"
MIN_PASSWORD_SCORE = 3

# Blank strings count as absent, like a field that was never sent
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Stored naive UTC; always sent to clients with an explicit +00:00 offset
UtcDatetime = Annotated[
    datetime,
    PlainSerializer(lambda v: as_utc(v).isoformat(), return_type=str, when_used="json"),
]


def check_password_strength(password: str) -> str:
    result = zxcvbn(password)
    if result["score"] >= MIN_PASSWORD_SCORE:
        return password

    feedback = result.get("feedback") or {}
    hint = feedback.get("warning") or next(iter(feedback.get("suggestions") or []), "")
    raise ValueError(f"Weak password: {hint or 'use a longer mix of words and characters'}")
