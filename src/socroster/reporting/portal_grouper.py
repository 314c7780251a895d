"""Grouping and filtering of tracked portal credentials."""

import logging
from collections import Counter
from typing import Iterable, Optional

from socroster.domain.models import PortalAccessRecord, PortalGroup
from socroster.errors import ensure_sequence

logger = logging.getLogger(__name__)


def group_by_url(records: Iterable[PortalAccessRecord]) -> list[PortalGroup]:
    """Collect access records into one group per portal URL.

    Groups keep the order in which their URL first appears. Inside a group
    records are sorted by role (plain string comparison, so case-sensitive).
    Repeated records are kept. The group's name and category come from its
    first record after sorting, so grouping the flattened output again
    yields the same groups.

    Args:
        records: Portal access records in any order.

    Returns:
        List of portal groups, empty when ``records`` is empty.
    """
    rows = ensure_sequence(records, "records")

    groups: dict[str, PortalGroup] = {}
    for record in rows:
        group = groups.get(record.portal_url)
        if group is None:
            group = PortalGroup(portal_url=record.portal_url)
            groups[record.portal_url] = group
        group.portals.append(record)

    for group in groups.values():
        group.portals.sort(key=lambda r: r.role)
        head = group.portals[0]
        group.portal_name = head.portal_name
        group.portal_category = head.portal_category
        for record in group.portals[1:]:
            if (record.portal_name, record.portal_category) != (
                head.portal_name,
                head.portal_category,
            ):
                logger.warning(
                    "Portal %s record %s has name/category %r/%r, keeping %r/%r",
                    record.portal_url,
                    record.id,
                    record.portal_name,
                    record.portal_category,
                    head.portal_name,
                    head.portal_category,
                )

    logger.debug("Grouped %d portal records into %d URLs", len(rows), len(groups))
    return list(groups.values())


def category_counts(records: Iterable[PortalAccessRecord]) -> dict[str, int]:
    """Number of records per portal category."""
    return dict(Counter(r.portal_category for r in ensure_sequence(records, "records")))


def categories(records: Iterable[PortalAccessRecord]) -> list[str]:
    """Distinct portal categories, sorted."""
    return sorted({r.portal_category for r in ensure_sequence(records, "records")})


def _searchable_fields(record: PortalAccessRecord) -> tuple[str, ...]:
    return (
        record.portal_category,
        record.portal_name,
        record.id,
        record.portal_url,
        record.user_identifier,
        record.role,
        record.tracked_by,
        record.remark,
    )


def filter_records(
    records: Iterable[PortalAccessRecord],
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> list[PortalAccessRecord]:
    """Filter records by free-text search and exact category.

    Args:
        records: Records to filter.
        search: Case-insensitive substring matched against the descriptive fields.
        category: Exact category to keep; "all" or empty keeps every category.

    Returns:
        Matching records in input order.
    """
    rows = ensure_sequence(records, "records")
    needle = (search or "").strip().lower()

    result = []
    for record in rows:
        if category and category != "all" and record.portal_category != category:
            continue
        if needle and not any(needle in field.lower() for field in _searchable_fields(record)):
            continue
        result.append(record)
    return result
