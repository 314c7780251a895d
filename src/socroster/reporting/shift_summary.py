"""Per-member shift tallies and workday gaps for a monthly roster."""

import logging
from typing import Iterable, Optional

from socroster.domain.dates import month_dates, validate_month
from socroster.domain.models import MemberShiftSummary, RosterDay, ShiftCode
from socroster.domain.policies import FixedWeekendPolicy, WeekendPolicy
from socroster.errors import InvalidArgument, ensure_sequence

logger = logging.getLogger(__name__)


class ShiftSummaryAggregator:
    """Builds the monthly summary table shown under a roster.

    Counting is lenient. A value that is not one of the seven shift codes is
    left out of every code count. It is tallied in
    ``MemberShiftSummary.unrecognized`` so callers can surface it.

    Example:
        >>> aggregator = ShiftSummaryAggregator()
        >>> summary = aggregator.summarize(days, ["Tanvir", "Sizan"])
        >>> summary["Tanvir"].workdays, summary["Tanvir"].gap
        (22, 0)
    """

    def __init__(self, weekend_policy: Optional[WeekendPolicy] = None):
        self.weekend_policy = weekend_policy or FixedWeekendPolicy()

    def total_workdays(self, year: int, month: int) -> int:
        """Count the dates of a month that fall outside the weekend.

        Raises:
            InvalidArgument: If the month is not 1-12 or year/month are not integers.
        """
        validate_month(year, month)
        return sum(1 for d in month_dates(year, month) if self.weekend_policy.is_workday(d))

    def summarize(
        self,
        days: Iterable[RosterDay],
        members: Iterable[str],
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> dict[str, MemberShiftSummary]:
        """Tally each member's shift codes across the given days.

        Args:
            days: Roster rows for one month.
            members: Member names to summarize, in output order.
            year: Year used for the nominal workday count (defaults to the first row's).
            month: Month used for the nominal workday count (defaults to the first row's).
                Give both or neither.

        Returns:
            Dict mapping each member to its summary.

        Raises:
            InvalidArgument: If only one of year and month is given, or the
                month is invalid.
        """
        rows = ensure_sequence(days, "days")
        names = ensure_sequence(members, "members")
        if (year is None) != (month is None):
            raise InvalidArgument("year and month must be given together")

        summaries = {name: MemberShiftSummary(member=name) for name in names}

        # First pass: accumulate counts.
        for day in rows:
            for name, summary in summaries.items():
                raw = day.raw_shift(name)
                code = ShiftCode.parse(raw)
                if code is not None:
                    summary.counts[code] += 1
                elif raw not in (None, ""):
                    summary.unrecognized += 1

        # Second pass: workdays and gap derive from the final counts.
        if year is None and rows:
            year, month = rows[0].date.year, rows[0].date.month
        total = self.total_workdays(year, month) if year is not None else 0
        for summary in summaries.values():
            summary.total_workdays_in_month = total

        unrecognized = {n: s.unrecognized for n, s in summaries.items() if s.unrecognized}
        if unrecognized:
            logger.warning("Unrecognized shift codes skipped: %s", unrecognized)
        logger.debug(
            "Summarized %d days for %d members (%d nominal workdays)",
            len(rows),
            len(summaries),
            total,
        )
        return summaries

    def members_by_shift(
        self,
        day: RosterDay,
        members: Iterable[str],
    ) -> dict[ShiftCode, list[str]]:
        """Members on each shift for one day; codes with nobody are omitted."""
        result: dict[ShiftCode, list[str]] = {}
        for name in members:
            code = day.shift_for(name)
            if code is not None:
                result.setdefault(code, []).append(name)
        return {code: result[code] for code in ShiftCode if code in result}


_default_aggregator = ShiftSummaryAggregator()


def summarize(
    days: Iterable[RosterDay],
    members: Iterable[str],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> dict[str, MemberShiftSummary]:
    """Summarize with the default Friday/Saturday weekend."""
    return _default_aggregator.summarize(days, members, year, month)


def total_workdays(year: int, month: int) -> int:
    """Nominal workdays of a month under the default Friday/Saturday weekend."""
    return _default_aggregator.total_workdays(year, month)


def members_by_shift(day: RosterDay, members: Iterable[str]) -> dict[ShiftCode, list[str]]:
    return _default_aggregator.members_by_shift(day, members)
