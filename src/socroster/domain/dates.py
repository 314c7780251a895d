"""Calendar helpers for monthly rosters."""

import calendar
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from socroster.domain.policies import WEEKDAY_NAMES
from socroster.errors import InvalidArgument


def validate_month(year, month) -> None:
    """Reject month/year values that cannot address a calendar month."""
    for name, value in (("year", year), ("month", month)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if not 1 <= month <= 12:
        raise InvalidArgument(f"month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9999:
        raise InvalidArgument(f"year must be between 1 and 9999, got {year}")


def days_in_month(year: int, month: int) -> int:
    validate_month(year, month)
    return calendar.monthrange(year, month)[1]


def month_dates(year: int, month: int) -> list[date]:
    """Every date of the month, in order."""
    first = date(year, month, 1)
    return [first + timedelta(days=i) for i in range(days_in_month(year, month))]


def weekday_name(d: date) -> str:
    """English weekday name, e.g. "Friday"."""
    return WEEKDAY_NAMES[d.weekday()]


def roster_id(month: int, year: int) -> str:
    """Roster identifier used upstream, e.g. ``ROS032024SOCP``."""
    validate_month(year, month)
    return f"ROS{month:02d}{year}SOCP"


def parse_date(value, tz: Optional[tzinfo] = None) -> date:
    """Coerce an upstream date value into a ``date``.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and ISO
    timestamps such as ``2024-03-01T00:00:00.000Z``.

    Without ``tz`` only the written date part of a timestamp is used, so
    ``2024-02-29T18:00:00.000Z`` is 29 February whatever the deployment's
    local zone. The database driver serializes local-midnight ``date``
    columns as UTC instants; for a zone east of UTC (Asia/Dhaka is +06:00)
    pass that zone as ``tz`` and timezone-aware values are converted to it
    before the date is taken, giving 1 March for the example above.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if tz is not None and len(text) > 10:
            try:
                stamp = parse_timestamp(text)
            except InvalidArgument:
                stamp = None
            if stamp is not None and stamp.tzinfo is not None:
                return stamp.astimezone(tz).date()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
    raise InvalidArgument(f"Cannot interpret {value!r} as a date")


def parse_timestamp(value):
    """Coerce an upstream timestamp, returning None when absent."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
    raise InvalidArgument(f"Cannot interpret {value!r} as a timestamp")
