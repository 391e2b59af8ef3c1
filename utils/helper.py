import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config import DEFAULT_TIMEZONE

# Shift boundaries: H:MM or HH:MM, 24-hour
CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

MINUTE = timedelta(minutes=1)


class InvalidInputError(ValueError):
    """Raised when a punch or schedule cannot be used for a calculation."""


def parse_instant(value: Union[datetime, str, None], field: str) -> datetime:
    """Turn a datetime or ISO-8601 string into an aware UTC datetime.

    Values without an offset are read as UTC. Numbers are rejected rather
    than guessed at as epoch seconds or milliseconds.
    """
    if value is None or value == "":
        raise InvalidInputError(f"{field} is required")

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidInputError(f"{field} is not a valid ISO-8601 timestamp: {value!r}") from None
    else:
        raise InvalidInputError(f"{field} must be a timestamp, got {type(value).__name__}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        raise InvalidInputError(f"{field} is outside the supported date range: {value!r}") from None


def parse_clock_time(value: Optional[str], field: str) -> time:
    if not value or not isinstance(value, str):
        raise InvalidInputError(f"schedule {field} time is required")
    m = CLOCK_RE.match(value.strip())
    if not m:
        raise InvalidInputError(f"schedule {field} must be HH:MM, got {value!r}")
    h, mn = int(m.group(1)), int(m.group(2))
    if h > 23 or mn > 59:
        raise InvalidInputError(f"schedule {field} is out of range: {value!r}")
    return time(h, mn)


def resolve_timezone(name: Optional[str]) -> ZoneInfo:
    name = name or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidInputError(f"unknown timezone: {name!r}") from None


def local_datetime(day: date, clock: time, zone: ZoneInfo) -> datetime:
    """Wall-clock `day` + `clock` in `zone`, returned as a UTC instant."""
    return datetime.combine(day, clock, tzinfo=zone).astimezone(timezone.utc)


def minutes_between(start: datetime, end: datetime) -> int:
    # int() truncates toward zero for negative spans too
    return int((end - start) / MINUTE)


def ceil_minutes(span: timedelta) -> int:
    return -((-span) // MINUTE)


def format_hours(minutes: int) -> str:
    return f"{minutes / 60:.2f}"


def week_range(day: date) -> Tuple[date, date]:
    """Sunday through Saturday of the week containing `day`."""
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)
