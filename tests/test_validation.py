"""Tests for data-quality validation."""

from datetime import date

import pytest

from socroster.domain.models import (
    NoteType,
    PortalAccessRecord,
    RosterDay,
    ShiftChangeNote,
    blank_month,
)
from socroster.validation.validator import (
    DataQualityValidator,
    IssueType,
)


class TestRosterValidation:
    """Tests for DataQualityValidator.validate_roster."""

    @pytest.fixture
    def validator(self):
        return DataQualityValidator()

    @pytest.fixture
    def days(self):
        """A clean week of March 2024."""
        rows = blank_month(2024, 3, ["Tanvir", "Sizan"])[:7]
        for day in rows:
            day.shifts["tanvir"] = "MORNING"
            day.shifts["sizan"] = "NIGHT"
        return rows

    def test_clean_roster(self, validator, days):
        """Clean rows produce no findings."""
        result = validator.validate_roster(days, ["Tanvir", "Sizan"])
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_unknown_code_is_warning(self, validator, days):
        """Unknown codes warn but keep the roster valid."""
        days[2].shifts["sizan"] = "night"
        result = validator.validate_roster(days)
        assert result.is_valid
        issues = result.of_type(IssueType.UNKNOWN_SHIFT_CODE)
        assert len(issues) == 1
        assert issues[0].member == "sizan"
        assert issues[0].date == date(2024, 3, 3)

    def test_weekday_mismatch(self, validator, days):
        """A wrong weekday label is reported."""
        days[0].day = "Monday"
        result = validator.validate_roster(days)
        assert len(result.of_type(IssueType.WEEKDAY_MISMATCH)) == 1

    def test_out_of_order_and_duplicates(self, validator, days):
        """Backwards and repeated dates are reported."""
        rows = [days[1], days[0], days[0]]
        result = validator.validate_roster(rows)
        assert len(result.of_type(IssueType.DATES_OUT_OF_ORDER)) == 1
        assert len(result.of_type(IssueType.DUPLICATE_DATE)) == 1

    def test_mixed_months(self, validator, days):
        """Rows from two months are reported."""
        rows = days + [RosterDay(date=date(2024, 4, 1))]
        result = validator.validate_roster(rows)
        assert len(result.of_type(IssueType.MIXED_MONTHS)) == 1

    def test_exchange_without_change_is_error(self, validator, days):
        """An exchange note that keeps the same shift invalidates the roster."""
        days[3].notes.append(
            ShiftChangeNote(
                note_type=NoteType.SHIFT_EXCHANGE,
                request_date=days[3].date,
                requested_by="SOC-01",
                requested_by_name="Tanvir",
                your_shift="MORNING",
                updated_shift="MORNING",
                assigned_to="Sizan",
            )
        )
        result = validator.validate_roster(days)
        assert not result.is_valid
        assert result.errors[0].issue_type == IssueType.EXCHANGE_WITHOUT_CHANGE
        assert "Tanvir" in str(result.errors[0])

    def test_leave_note_not_leave_is_error(self, validator, days):
        """A leave note must end in LEAVE."""
        days[3].notes.append(
            ShiftChangeNote(
                note_type=NoteType.TAKE_LEAVE,
                request_date=days[3].date,
                requested_by="SOC-02",
                your_shift="NIGHT",
                updated_shift="OFFDAY",
            )
        )
        result = validator.validate_roster(days)
        assert not result.is_valid
        assert result.of_type(IssueType.LEAVE_NOT_LEAVE)


class TestPortalValidation:
    """Tests for DataQualityValidator.validate_portals."""

    @pytest.fixture
    def validator(self):
        return DataQualityValidator()

    def test_divergent_metadata(self, validator):
        """Records sharing a URL but not a name or category are reported."""
        records = [
            PortalAccessRecord(id="PT1", portal_url="u", portal_name="SIEM",
                               portal_category="SIEM"),
            PortalAccessRecord(id="PT2", portal_url="u", portal_name="SIEM Console",
                               portal_category="Monitoring"),
        ]
        result = validator.validate_portals(records)
        assert result.is_valid
        assert len(result.of_type(IssueType.DIVERGENT_PORTAL_NAME)) == 1
        assert len(result.of_type(IssueType.DIVERGENT_PORTAL_CATEGORY)) == 1

    def test_duplicate_ids(self, validator):
        """Repeated record ids are reported with their count."""
        record = PortalAccessRecord(id="PT1", portal_url="u")
        result = validator.validate_portals([record, record, record])
        issues = result.of_type(IssueType.DUPLICATE_RECORD_ID)
        assert len(issues) == 1
        assert issues[0].details["count"] == 3

    def test_consistent_records(self, validator):
        """Consistent records produce no findings."""
        records = [
            PortalAccessRecord(id="PT1", portal_url="u", portal_name="A", role="Admin"),
            PortalAccessRecord(id="PT2", portal_url="u", portal_name="A", role="Agent"),
        ]
        result = validator.validate_portals(records)
        assert result.warnings == []
