"""Domain models and business rules for roster reporting."""

from socroster.domain.dates import (
    month_dates,
    parse_date,
    roster_id,
    validate_month,
    weekday_name,
)
from socroster.domain.models import (
    INDIVIDUAL,
    MemberShiftSummary,
    NoteType,
    PortalAccessRecord,
    PortalGroup,
    RosterConfig,
    RosterDay,
    ShiftChangeNote,
    ShiftCode,
    WeekGroup,
    blank_month,
)
from socroster.domain.policies import FixedWeekendPolicy, WeekendPolicy

__all__ = [
    # Models
    "INDIVIDUAL",
    "MemberShiftSummary",
    "NoteType",
    "PortalAccessRecord",
    "PortalGroup",
    "RosterConfig",
    "RosterDay",
    "ShiftChangeNote",
    "ShiftCode",
    "WeekGroup",
    "blank_month",
    # Calendar helpers
    "month_dates",
    "parse_date",
    "roster_id",
    "validate_month",
    "weekday_name",
    # Policies
    "FixedWeekendPolicy",
    "WeekendPolicy",
]
