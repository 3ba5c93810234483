"""Calendar-day and timezone helpers.

Event datetimes are stored as naive UTC. A "day" asked for by a client is a
day on the client's own calendar, so it becomes a half-open UTC range
[local midnight, next local midnight) that doesn't depend on the server's
timezone. The range is 23 or 25 hours long on DST transition days.
"""

import re
from datetime import UTC, date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_OFFSET_PATTERN = re.compile(r"^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$")


def parse_timezone(value: str | None, default: str = "UTC") -> tzinfo:
    """Resolve an IANA zone name ("Europe/Madrid") or a UTC offset ("+02:00", "Z").

    Raises:
        ValueError: If the value is neither a known zone nor a valid offset.
    """
    name = (value or default).strip()
    if name in ("Z", "z"):
        return UTC

    match = _OFFSET_PATTERN.match(name)
    if match:
        hours, minutes = int(match["hours"]), int(match["minutes"])
        if hours > 23 or minutes > 59:
            raise ValueError(f"Invalid UTC offset: {name}")
        offset = timedelta(hours=hours, minutes=minutes)
        return timezone(-offset if match["sign"] == "-" else offset)

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def to_utc_naive(value: datetime) -> datetime:
    """Normalize a datetime for storage: aware values are converted to UTC,
    naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Inverse of to_utc_naive: a stored naive value read back as aware UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def local_day_bounds(
    day: str, tz: str | None = None, default_tz: str = "UTC"
) -> tuple[datetime, datetime]:
    """Return the naive-UTC [start, end) range covering one local calendar day.

    ``day`` is either a plain date ("2024-03-15") or a full ISO datetime. For a
    datetime, the calendar day is taken in ``tz`` when given, otherwise in the
    datetime's own offset.

    Raises:
        ValueError: If ``day`` or ``tz`` can't be parsed.
    """
    local_date: date
    zone: tzinfo
    try:
        local_date = date.fromisoformat(day)
    except ValueError:
        try:
            moment = datetime.fromisoformat(day)
        except ValueError as e:
            raise ValueError(f"Invalid date: {day}") from e
        if tz is not None or moment.tzinfo is None:
            zone = parse_timezone(tz, default_tz)
            moment = moment.replace(tzinfo=zone) if moment.tzinfo is None else moment
            local_date = moment.astimezone(zone).date()
        else:
            zone = moment.tzinfo
            local_date = moment.date()
    else:
        zone = parse_timezone(tz, default_tz)

    start = datetime.combine(local_date, time.min, tzinfo=zone)
    end = datetime.combine(local_date + timedelta(days=1), time.min, tzinfo=zone)
    return to_utc_naive(start), to_utc_naive(end)
