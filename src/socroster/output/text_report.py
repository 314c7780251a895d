"""Plain-text reports for rosters and tracked portals.

This module renders:
- Weekly roster tables with weekend rows marked
- The monthly shift summary with signed workday gaps
- Portal groups with their roles and credentials
"""

from pathlib import Path
from typing import Optional, Union

from socroster.domain.models import (
    MemberShiftSummary,
    PortalGroup,
    RosterDay,
    ShiftCode,
)
from socroster.domain.policies import FixedWeekendPolicy, WeekendPolicy
from socroster.reporting.week_grouper import group_by_week

# Short labels keep the weekly table narrow.
SHIFT_ABBREVIATIONS = {
    ShiftCode.REGULAR: "REG",
    ShiftCode.MORNING: "MOR",
    ShiftCode.NOON: "NOON",
    ShiftCode.EVENING: "EVE",
    ShiftCode.NIGHT: "NGT",
    ShiftCode.OFFDAY: "OFF",
    ShiftCode.LEAVE: "LV",
}


def format_gap(gap: int) -> str:
    """Signed gap label: ``+2``, ``-1`` or ``0``."""
    if gap == 0:
        return "0"
    return f"{gap:+d}"


class TextReportGenerator:
    """Generates human-readable text reports.

    Example:
        >>> generator = TextReportGenerator()
        >>> text = generator.roster_report(days, summaries, members)
    """

    def __init__(self, weekend_policy: Optional[WeekendPolicy] = None, width: int = 80):
        self.weekend_policy = weekend_policy or FixedWeekendPolicy()
        self.width = width

    def write(self, content: str, output_path: Union[str, Path]) -> str:
        """Save report text to a file and return it."""
        Path(output_path).write_text(content, encoding="utf-8")
        return content

    def roster_report(
        self,
        days: list[RosterDay],
        summaries: dict[str, MemberShiftSummary],
        members: list[str],
        title: Optional[str] = None,
    ) -> str:
        """Render weekly tables followed by the monthly summary."""
        lines = []
        if title is None and days:
            title = f"ROSTER - {days[0].date.strftime('%B %Y')}"
        lines.append("=" * self.width)
        lines.append(title or "ROSTER")
        lines.append("=" * self.width)
        lines.append("")

        if not days:
            lines.append("No roster rows.")
        for index, week in enumerate(group_by_week(days), 1):
            lines.extend(self._week_lines(index, week.days, members))
            lines.append("")

        lines.extend(self._summary_lines(summaries))
        return "\n".join(lines)

    def _week_lines(self, index: int, days: list[RosterDay], members: list[str]) -> list[str]:
        lines = ["-" * self.width]
        lines.append(
            f"Week {index}: {days[0].date.isoformat()} to {days[-1].date.isoformat()}"
        )
        lines.append("-" * self.width)
        header = f"{'Date':<11} {'Day':<4} " + " ".join(f"{m[:6]:>6}" for m in members)
        lines.append(header)
        for day in days:
            cells = []
            for member in members:
                code = day.shift_for(member)
                if code is not None:
                    cells.append(f"{SHIFT_ABBREVIATIONS[code]:>6}")
                else:
                    raw = day.raw_shift(member)
                    cells.append(f"{('?' if raw else '-'):>6}")
            marker = "*" if self.weekend_policy.is_weekend(day.date) else " "
            lines.append(
                f"{day.date.isoformat():<11} {day.day[:3]:<3}{marker} " + " ".join(cells)
            )
            for note in day.notes:
                counterpart = note.assigned_to or "nobody"
                lines.append(
                    f"{'':<16}note: {note.note_type.value} by "
                    f"{note.requested_by_name or note.requested_by} "
                    f"({note.your_shift} -> {note.updated_shift}, with {counterpart})"
                )
        return lines

    def summary_report(self, summaries: dict[str, MemberShiftSummary]) -> str:
        """Render only the monthly summary table."""
        return "\n".join(self._summary_lines(summaries))

    def _summary_lines(self, summaries: dict[str, MemberShiftSummary]) -> list[str]:
        lines = ["-" * self.width, "MONTHLY SUMMARY", "-" * self.width]
        if not summaries:
            lines.append("No members.")
            return lines

        total = next(iter(summaries.values())).total_workdays_in_month
        lines.append(f"Nominal workdays: {total}")
        header = f"{'Member':<12}" + "".join(
            f"{SHIFT_ABBREVIATIONS[c]:>5}" for c in ShiftCode
        )
        lines.append(header + f"{'WORK':>6}{'GAP':>5}")
        for name, summary in summaries.items():
            counts = "".join(f"{summary.count(c):>5}" for c in ShiftCode)
            row = f"{name[:12]:<12}{counts}{summary.workdays:>6}{format_gap(summary.gap):>5}"
            if summary.unrecognized:
                row += f"  ({summary.unrecognized} unrecognized)"
            lines.append(row)
        return lines

    def portal_report(
        self,
        groups: list[PortalGroup],
        show_passwords: bool = False,
    ) -> str:
        """Render portal groups with one line per role."""
        record_count = sum(len(g) for g in groups)
        lines = ["=" * self.width]
        lines.append(f"TRACKED PORTALS - {len(groups)} URLs, {record_count} roles")
        lines.append("=" * self.width)

        for group in groups:
            lines.append("")
            lines.append(f"{group.portal_name or group.portal_url} [{group.portal_category}]")
            lines.append(f"  {group.portal_url}")
            for record in group.portals:
                password = record.password if show_passwords else record.masked_password()
                lines.append(
                    f"  - {record.role or '(no role)'}: "
                    f"user={record.user_identifier or '-'} "
                    f"password={password or '-'}"
                )
                if record.remark:
                    lines.append(f"      remark: {record.remark}")
        return "\n".join(lines)
