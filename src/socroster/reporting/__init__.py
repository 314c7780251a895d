"""Derived roster and portal views: weeks, monthly summaries, URL groups."""

from socroster.reporting.portal_grouper import (
    categories,
    category_counts,
    filter_records,
    group_by_url,
)
from socroster.reporting.shift_summary import (
    ShiftSummaryAggregator,
    members_by_shift,
    summarize,
    total_workdays,
)
from socroster.reporting.week_grouper import (
    DutyOverview,
    current_week_index,
    duty_overview,
    group_by_week,
)

__all__ = [
    # Roster weeks
    "group_by_week",
    "current_week_index",
    "duty_overview",
    "DutyOverview",
    # Monthly summary
    "ShiftSummaryAggregator",
    "summarize",
    "total_workdays",
    "members_by_shift",
    # Portals
    "group_by_url",
    "category_counts",
    "categories",
    "filter_records",
]
