"""Tests for portal grouping and filtering."""

import pytest

from socroster.domain.models import PortalAccessRecord
from socroster.errors import InvalidArgument
from socroster.reporting.portal_grouper import (
    categories,
    category_counts,
    filter_records,
    group_by_url,
)


def record(pid, url, role, name="", category="SIEM", **kwargs):
    return PortalAccessRecord(
        id=pid,
        portal_url=url,
        portal_name=name or url,
        portal_category=category,
        role=role,
        **kwargs,
    )


class TestGroupByUrl:
    """Tests for group_by_url."""

    @pytest.fixture
    def records(self):
        """Records for three portals, interleaved."""
        return [
            record("PT1", "https://siem.example", "Agent", name="SIEM"),
            record("PT2", "https://edr.example", "Viewer", name="EDR", category="EDR"),
            record("PT3", "https://siem.example", "Admin", name="SIEM console"),
            record("PT4", "https://mail.example", "Analyst", category="Mail"),
            record("PT5", "https://edr.example", "Admin", name="EDR", category="EDR"),
        ]

    def test_groups_in_first_seen_order(self, records):
        """Groups follow the order their URL first appears."""
        groups = group_by_url(records)
        assert [g.portal_url for g in groups] == [
            "https://siem.example",
            "https://edr.example",
            "https://mail.example",
        ]

    def test_roles_sorted_within_group(self, records):
        """Agent before Admin in the input gives Admin before Agent."""
        groups = group_by_url(records)
        assert groups[0].roles == ["Admin", "Agent"]
        for group in groups:
            assert group.roles == sorted(group.roles)

    def test_metadata_from_first_sorted_record(self, records):
        """The group takes its name from the record with the lowest role."""
        groups = group_by_url(records)
        assert groups[0].portal_name == "SIEM console"
        assert groups[1].portal_category == "EDR"

    def test_regrouping_divergent_names_is_stable(self):
        """Divergent names under one URL survive a second grouping unchanged."""
        records = [
            record("PT1", "https://siem.example", "Agent", name="SIEM"),
            record("PT2", "https://siem.example", "Admin", name="SIEM console",
                   category="Monitoring"),
        ]
        groups = group_by_url(records)
        regrouped = group_by_url([r for g in groups for r in g.portals])
        assert regrouped == groups
        assert regrouped[0].portal_name == "SIEM console"
        assert regrouped[0].portal_category == "Monitoring"

    def test_divergent_metadata_logged(self, records, caplog):
        """A later record with a different name is logged, not applied."""
        with caplog.at_level("WARNING", logger="socroster"):
            group_by_url(records)
        assert "SIEM console" in caplog.text

    def test_regrouping_is_stable(self, records):
        """Grouping the flattened groups again gives the same groups."""
        groups = group_by_url(records)
        flattened = [r for g in groups for r in g.portals]
        assert group_by_url(flattened) == groups

    def test_every_record_kept(self, records):
        """The total record count is preserved."""
        assert sum(len(g) for g in group_by_url(records)) == len(records)

    def test_duplicates_kept(self):
        """Identical records are not deduplicated."""
        dup = record("PT1", "https://siem.example", "Agent")
        groups = group_by_url([dup, dup])
        assert len(groups) == 1
        assert len(groups[0]) == 2

    def test_role_sort_is_case_sensitive(self):
        """Upper-case roles sort before lower-case ones."""
        groups = group_by_url([
            record("PT1", "https://siem.example", "analyst"),
            record("PT2", "https://siem.example", "Zeta"),
        ])
        assert groups[0].roles == ["Zeta", "analyst"]

    def test_equal_roles_keep_input_order(self):
        """Sorting is stable for equal roles."""
        groups = group_by_url([
            record("PT1", "https://siem.example", "Admin"),
            record("PT2", "https://siem.example", "Admin"),
        ])
        assert [r.id for r in groups[0].portals] == ["PT1", "PT2"]

    def test_empty_input(self):
        """No records gives no groups."""
        assert group_by_url([]) == []

    def test_rejects_non_sequence(self):
        """A bare string is rejected."""
        with pytest.raises(InvalidArgument):
            group_by_url("https://siem.example")


class TestFiltering:
    """Tests for category helpers and filter_records."""

    @pytest.fixture
    def records(self):
        return [
            record("PT1", "https://siem.example", "Admin", name="SIEM", tracked_by="tanvir"),
            record("PT2", "https://edr.example", "Viewer", name="EDR", category="EDR"),
            record("PT3", "https://mail.example", "Analyst", category="Mail",
                   remark="Shared mailbox"),
            record("PT4", "https://siem.example", "Agent", name="SIEM"),
        ]

    def test_category_counts(self, records):
        """Records are counted per category."""
        assert category_counts(records) == {"SIEM": 2, "EDR": 1, "Mail": 1}

    def test_categories_sorted(self, records):
        """Distinct categories come back sorted."""
        assert categories(records) == ["EDR", "Mail", "SIEM"]

    def test_filter_by_category(self, records):
        """Only the exact category is kept."""
        result = filter_records(records, category="SIEM")
        assert [r.id for r in result] == ["PT1", "PT4"]

    def test_filter_all_category(self, records):
        """The 'all' category keeps everything."""
        assert filter_records(records, category="all") == records

    def test_search_is_case_insensitive(self, records):
        """Search matches remarks regardless of case."""
        result = filter_records(records, search="MAILBOX")
        assert [r.id for r in result] == ["PT3"]

    def test_search_tracked_by(self, records):
        """Search covers who tracks the record."""
        assert [r.id for r in filter_records(records, search="tanvir")] == ["PT1"]

    def test_search_and_category_combine(self, records):
        """Both filters must match."""
        result = filter_records(records, search="agent", category="SIEM")
        assert [r.id for r in result] == ["PT4"]

    def test_no_filters(self, records):
        """No search and no category keeps every record."""
        assert filter_records(records) == records
