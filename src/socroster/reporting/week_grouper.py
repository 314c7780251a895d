"""Grouping of monthly roster rows into Sunday-started weeks."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from socroster.domain.models import RosterDay, ShiftCode, WeekGroup
from socroster.errors import ensure_sequence

logger = logging.getLogger(__name__)


def group_by_week(days: Iterable[RosterDay]) -> list[WeekGroup]:
    """Partition roster rows into weeks that start on Sunday.

    A new week begins at every Sunday once the current week holds at least
    one day. The first and last weeks of a month are usually partial.
    Concatenating the returned groups reproduces ``days`` exactly.

    Args:
        days: Roster rows in ascending date order.

    Returns:
        List of week groups, empty when ``days`` is empty.
    """
    rows = ensure_sequence(days, "days")

    weeks: list[WeekGroup] = []
    current: list[RosterDay] = []
    for day in rows:
        if day.is_sunday and current:
            weeks.append(WeekGroup(days=current))
            current = []
        current.append(day)
    if current:
        weeks.append(WeekGroup(days=current))

    logger.debug("Grouped %d roster days into %d weeks", len(rows), len(weeks))
    return weeks


def current_week_index(weeks: list[WeekGroup], today: date) -> int:
    """Index of the week containing ``today``, or 0 if none does."""
    for index, week in enumerate(weeks):
        if week.contains(today):
            return index
    return 0


@dataclass
class DutyOverview:
    """A member's shifts around a reference date."""

    member: str
    yesterday: Optional[ShiftCode] = None
    today: Optional[ShiftCode] = None
    tomorrow: Optional[ShiftCode] = None


def duty_overview(days: Iterable[RosterDay], member: str, today: date) -> DutyOverview:
    """Look up a member's duty for yesterday, today and tomorrow."""
    by_date = {d.date: d for d in ensure_sequence(days, "days")}

    def lookup(target: date) -> Optional[ShiftCode]:
        row = by_date.get(target)
        return row.shift_for(member) if row else None

    return DutyOverview(
        member=member,
        yesterday=lookup(today - timedelta(days=1)),
        today=lookup(today),
        tomorrow=lookup(today + timedelta(days=1)),
    )
