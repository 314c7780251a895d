"""Policy definitions for roster rules.

Weekend handling is kept separate from the aggregators so the organisation's
fixed weekend can be swapped without touching the reporting code.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional

from socroster.errors import InvalidArgument

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

FRIDAY = 4
SATURDAY = 5
SUNDAY = 6


class WeekendPolicy(ABC):
    """Abstract base class for deciding which dates are non-working."""

    @abstractmethod
    def is_weekend(self, day: date) -> bool:
        """Check if a date falls on the weekend."""
        pass

    def is_workday(self, day: date) -> bool:
        """Check if a date is a nominal working day."""
        return not self.is_weekend(day)


class FixedWeekendPolicy(WeekendPolicy):
    """Weekend made of fixed weekdays (Friday and Saturday by default).

    Args:
        weekend_days: Python weekday numbers (Monday=0 ... Sunday=6).
    """

    def __init__(self, weekend_days: Optional[Iterable[int]] = None):
        if weekend_days is None:
            weekend_days = (FRIDAY, SATURDAY)
        self.weekend_days = frozenset(weekend_days)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "FixedWeekendPolicy":
        """Create a policy from weekday names such as "Friday"."""
        lookup = {name.lower(): i for i, name in enumerate(WEEKDAY_NAMES)}
        days = []
        for name in names:
            key = str(name).strip().lower()
            if key not in lookup:
                raise InvalidArgument(f"Unknown weekday name: {name!r}")
            days.append(lookup[key])
        return cls(days)

    def is_weekend(self, day: date) -> bool:
        return day.weekday() in self.weekend_days

    @property
    def weekend_names(self) -> list[str]:
        """Weekday names of the weekend, in calendar order."""
        return [WEEKDAY_NAMES[i] for i in sorted(self.weekend_days)]
