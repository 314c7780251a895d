"""Tests for monthly shift summaries."""

from datetime import date

import pytest

from socroster.domain.models import RosterDay, ShiftCode, blank_month
from socroster.domain.policies import FixedWeekendPolicy, SUNDAY
from socroster.errors import InvalidArgument
from socroster.reporting.shift_summary import (
    ShiftSummaryAggregator,
    members_by_shift,
    summarize,
    total_workdays,
)


class TestTotalWorkdays:
    """Tests for nominal workday counting."""

    def test_february_2024(self):
        """February 2024 has 29 days, 8 on Friday/Saturday."""
        assert total_workdays(2024, 2) == 21

    def test_march_2024(self):
        """March 2024 has five Fridays and five Saturdays."""
        assert total_workdays(2024, 3) == 21

    def test_april_2024(self):
        """April 2024 has four Fridays and four Saturdays."""
        assert total_workdays(2024, 4) == 22

    def test_custom_weekend(self):
        """A Sunday-only weekend leaves more workdays."""
        aggregator = ShiftSummaryAggregator(FixedWeekendPolicy([SUNDAY]))
        assert aggregator.total_workdays(2024, 3) == 26

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_month_out_of_range(self, month):
        """Months outside 1-12 are rejected."""
        with pytest.raises(InvalidArgument):
            total_workdays(2024, month)

    def test_non_integer_month(self):
        """A string month is rejected."""
        with pytest.raises(InvalidArgument):
            total_workdays(2024, "3")


class TestSummarize:
    """Tests for ShiftSummaryAggregator.summarize."""

    @pytest.fixture
    def members(self):
        return ["Tanvir", "Sizan", "Nazmul"]

    @pytest.fixture
    def days(self, members):
        """Ten days of March 2024 with a mix of codes."""
        rows = blank_month(2024, 3, members)[:10]
        pattern = ["MORNING", "NOON", "EVENING", "NIGHT", "REGULAR", "OFFDAY", "LEAVE"]
        for i, day in enumerate(rows):
            day.shifts["tanvir"] = pattern[i % len(pattern)]
            day.shifts["sizan"] = "REGULAR"
        rows[0].shifts["nazmul"] = "Morning"
        rows[1].shifts["nazmul"] = "NIGHT"
        rows[2].shifts["nazmul"] = ""
        return rows

    def test_counts_per_code(self, days, members):
        """Each recognized code is counted once per day."""
        result = summarize(days, members)
        tanvir = result["Tanvir"]
        assert tanvir.count(ShiftCode.MORNING) == 2
        assert tanvir.count(ShiftCode.NOON) == 2
        assert tanvir.count(ShiftCode.EVENING) == 2
        assert tanvir.count(ShiftCode.NIGHT) == 1
        assert tanvir.count(ShiftCode.REGULAR) == 1
        assert tanvir.count(ShiftCode.OFFDAY) == 1
        assert tanvir.count(ShiftCode.LEAVE) == 1

    def test_counts_bounded_by_days(self, days, members):
        """No member has more counted shifts than there are days."""
        for summary in summarize(days, members).values():
            assert summary.total_counted <= len(days)

    def test_workdays_is_sum_of_working_codes(self, days, members):
        """Workdays add up the five working shift codes."""
        for summary in summarize(days, members).values():
            expected = sum(
                summary.count(code)
                for code in (
                    ShiftCode.REGULAR,
                    ShiftCode.MORNING,
                    ShiftCode.NOON,
                    ShiftCode.EVENING,
                    ShiftCode.NIGHT,
                )
            )
            assert summary.workdays == expected

    def test_gap_against_month_total(self, days, members):
        """Gap is workdays plus leave minus the month's nominal workdays."""
        result = summarize(days, members)
        tanvir = result["Tanvir"]
        assert tanvir.total_workdays_in_month == 21
        assert tanvir.workdays == 8
        assert tanvir.gap == 8 + 1 - 21
        assert result["Sizan"].gap == 10 - 21

    def test_unrecognized_codes_are_not_counted(self, days, members, caplog):
        """Wrong-case codes are skipped, tallied and logged; blanks are ignored."""
        with caplog.at_level("WARNING", logger="socroster"):
            result = summarize(days, members)
        nazmul = result["Nazmul"]
        assert nazmul.total_counted == 1
        assert nazmul.count(ShiftCode.NIGHT) == 1
        assert nazmul.unrecognized == 1
        assert "Unrecognized shift codes" in caplog.text

    def test_absent_member_has_zero_counts(self, days):
        """A member without a column gets an all-zero summary."""
        result = summarize(days, ["Ghost"])
        ghost = result["Ghost"]
        assert ghost.total_counted == 0
        assert ghost.workdays == 0
        assert ghost.gap == -21

    def test_member_lookup_is_case_insensitive(self, days):
        """Member names match lower-cased row columns."""
        result = summarize(days, ["SIZAN"])
        assert result["SIZAN"].count(ShiftCode.REGULAR) == 10

    def test_output_order_follows_members(self, days):
        """Summaries come back in the requested member order."""
        result = summarize(days, ["Nazmul", "Tanvir"])
        assert list(result) == ["Nazmul", "Tanvir"]

    def test_explicit_month_overrides_rows(self, days, members):
        """The nominal total uses the given month when provided."""
        result = summarize(days, members, year=2024, month=4)
        assert result["Tanvir"].total_workdays_in_month == 22

    def test_empty_days_without_month(self, members):
        """No rows and no month gives zero totals."""
        result = summarize([], members)
        assert all(s.total_workdays_in_month == 0 for s in result.values())
        assert all(s.gap == 0 for s in result.values())

    def test_empty_days_with_month(self, members):
        """No rows with a month gives a negative gap of the full month."""
        result = summarize([], members, 2024, 2)
        assert result["Tanvir"].gap == -21

    def test_invalid_month(self, days, members):
        """A bad explicit month is rejected."""
        with pytest.raises(InvalidArgument):
            summarize(days, members, 2024, 13)

    @pytest.mark.parametrize("year, month", [(2024, None), (None, 4)])
    def test_year_and_month_given_together(self, days, members, year, month):
        """A lone year or month is rejected instead of being replaced."""
        with pytest.raises(InvalidArgument):
            summarize(days, members, year, month)

    def test_rejects_string_members(self, days):
        """Members must be a sequence of names."""
        with pytest.raises(InvalidArgument):
            summarize(days, "Tanvir")

    def test_to_dict(self, days, members):
        """Serialized summaries carry every code plus totals."""
        data = summarize(days, members)["Sizan"].to_dict()
        assert data["REGULAR"] == 10
        assert data["LEAVE"] == 0
        assert data["WORKDAYS"] == 10
        assert data["GAP"] == -11
        assert data["UNRECOGNIZED"] == 0


class TestMembersByShift:
    """Tests for members_by_shift."""

    def test_groups_in_code_order(self):
        """Members are listed under their code; empty codes are left out."""
        day = RosterDay(
            date=date(2024, 3, 4),
            shifts={"Tanvir": "NIGHT", "Sizan": "MORNING", "Nazmul": "NIGHT", "Borno": "x"},
        )
        result = members_by_shift(day, ["Tanvir", "Sizan", "Nazmul", "Borno"])
        assert list(result) == [ShiftCode.MORNING, ShiftCode.NIGHT]
        assert result[ShiftCode.NIGHT] == ["Tanvir", "Nazmul"]
        assert result[ShiftCode.MORNING] == ["Sizan"]
