"""Data-quality checks for roster and portal snapshots.

Upstream data comes from manual Excel uploads and hand-entered credentials,
so the reporting components tolerate anomalies instead of rejecting them.
This module is the place where those anomalies become visible: most findings
are warnings, and only broken shift change notes are errors.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, Optional

from socroster.domain.dates import weekday_name
from socroster.domain.models import (
    NoteType,
    PortalAccessRecord,
    RosterDay,
    ShiftCode,
)
from socroster.errors import ensure_sequence


class IssueType(Enum):
    """Types of data-quality findings."""

    UNKNOWN_SHIFT_CODE = "unknown_shift_code"
    WEEKDAY_MISMATCH = "weekday_mismatch"
    DATES_OUT_OF_ORDER = "dates_out_of_order"
    DUPLICATE_DATE = "duplicate_date"
    MIXED_MONTHS = "mixed_months"
    EXCHANGE_WITHOUT_CHANGE = "exchange_without_change"
    LEAVE_NOT_LEAVE = "leave_not_leave"
    DIVERGENT_PORTAL_NAME = "divergent_portal_name"
    DIVERGENT_PORTAL_CATEGORY = "divergent_portal_category"
    DUPLICATE_RECORD_ID = "duplicate_record_id"


@dataclass
class ValidationIssue:
    """A single finding."""

    issue_type: IssueType
    message: str
    date: Optional[date] = None
    member: Optional[str] = None
    record_id: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.issue_type.value}]"]
        if self.date is not None:
            parts.append(f"{self.date.isoformat()}:")
        if self.member:
            parts.append(f"Member {self.member}:")
        if self.record_id:
            parts.append(f"Record {self.record_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of checking a snapshot."""

    is_valid: bool = True
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def add_error(self, issue: ValidationIssue) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(issue)
        self.is_valid = False

    def add_warning(self, issue: ValidationIssue) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(issue)

    def of_type(self, issue_type: IssueType) -> list[ValidationIssue]:
        return [i for i in self.errors + self.warnings if i.issue_type == issue_type]


class DataQualityValidator:
    """Reports anomalies the reporting components silently absorb.

    Example:
        >>> validator = DataQualityValidator()
        >>> result = validator.validate_roster(days, ["Tanvir", "Sizan"])
        >>> for warning in result.warnings:
        ...     print(warning)
    """

    def validate_roster(
        self,
        days: Iterable[RosterDay],
        members: Optional[Iterable[str]] = None,
    ) -> ValidationResult:
        """Check roster rows and their shift change notes.

        Args:
            days: Roster rows, expected in ascending date order.
            members: Members whose shift values are checked; defaults to
                every member column present in the rows.

        Returns:
            ValidationResult with warnings for data anomalies and errors for
            shift change notes that break their invariants.
        """
        rows = ensure_sequence(days, "days")
        result = ValidationResult()

        self._validate_ordering(rows, result)

        months = {(d.date.year, d.date.month) for d in rows}
        if len(months) > 1:
            result.add_warning(
                ValidationIssue(
                    issue_type=IssueType.MIXED_MONTHS,
                    message=f"Rows span {len(months)} calendar months",
                    details={"months": sorted(months)},
                )
            )

        names = list(members) if members is not None else None
        for day in rows:
            expected = weekday_name(day.date)
            if day.day != expected:
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.WEEKDAY_MISMATCH,
                        message=f"Labelled {day.day!r} but the date is a {expected}",
                        date=day.date,
                    )
                )

            for name in names if names is not None else day.members:
                raw = day.raw_shift(name)
                if raw not in (None, "") and ShiftCode.parse(raw) is None:
                    result.add_warning(
                        ValidationIssue(
                            issue_type=IssueType.UNKNOWN_SHIFT_CODE,
                            message=f"Unrecognized shift value {raw!r}",
                            date=day.date,
                            member=name,
                        )
                    )

            self._validate_notes(day, result)

        return result

    def _validate_ordering(self, rows: list[RosterDay], result: ValidationResult) -> None:
        """Flag duplicated dates and rows that go backwards in time."""
        seen: set[date] = set()
        previous: Optional[date] = None
        for day in rows:
            if day.date in seen:
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.DUPLICATE_DATE,
                        message="Date appears more than once",
                        date=day.date,
                    )
                )
            elif previous is not None and day.date < previous:
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.DATES_OUT_OF_ORDER,
                        message=f"Follows {previous.isoformat()}",
                        date=day.date,
                    )
                )
            seen.add(day.date)
            previous = day.date

    def _validate_notes(self, day: RosterDay, result: ValidationResult) -> None:
        for note in day.notes:
            who = note.requested_by_name or note.requested_by
            if note.note_type == NoteType.SHIFT_EXCHANGE:
                if note.updated_shift == note.your_shift:
                    result.add_error(
                        ValidationIssue(
                            issue_type=IssueType.EXCHANGE_WITHOUT_CHANGE,
                            message=f"Shift exchange keeps shift {note.your_shift!r}",
                            date=note.request_date,
                            member=who,
                        )
                    )
            elif note.updated_shift_code != ShiftCode.LEAVE:
                result.add_error(
                    ValidationIssue(
                        issue_type=IssueType.LEAVE_NOT_LEAVE,
                        message=f"Leave note updates shift to {note.updated_shift!r}",
                        date=note.request_date,
                        member=who,
                    )
                )

    def validate_portals(self, records: Iterable[PortalAccessRecord]) -> ValidationResult:
        """Check portal records for inconsistent URL metadata and repeated ids."""
        rows = ensure_sequence(records, "records")
        result = ValidationResult()

        first_seen: dict[str, PortalAccessRecord] = {}
        ids: dict[str, int] = defaultdict(int)
        for record in rows:
            if record.id:
                ids[record.id] += 1

            first = first_seen.setdefault(record.portal_url, record)
            if first is record:
                continue
            if record.portal_name != first.portal_name:
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.DIVERGENT_PORTAL_NAME,
                        message=(
                            f"{record.portal_url} named {record.portal_name!r}, "
                            f"first seen as {first.portal_name!r}"
                        ),
                        record_id=record.id,
                    )
                )
            if record.portal_category != first.portal_category:
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.DIVERGENT_PORTAL_CATEGORY,
                        message=(
                            f"{record.portal_url} in category {record.portal_category!r}, "
                            f"first seen as {first.portal_category!r}"
                        ),
                        record_id=record.id,
                    )
                )

        for record_id, count in ids.items():
            if count > 1:
                result.add_warning(
                    ValidationIssue(
                        issue_type=IssueType.DUPLICATE_RECORD_ID,
                        message=f"Appears {count} times",
                        record_id=record_id,
                        details={"count": count},
                    )
                )

        return result
