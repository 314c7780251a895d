"""Command-line interface for the SOC roster reporting tool."""

import argparse
import logging
import sys
from datetime import date, datetime
from typing import Optional

from socroster.domain.models import (
    PortalAccessRecord,
    RosterConfig,
    RosterDay,
    ShiftCode,
    blank_month,
)
from socroster.errors import InvalidArgument, RosterChangeError
from socroster.loaders.json_loader import (
    load_portal_payload,
    load_roster_payload,
    read_json,
)
from socroster.output.pdf_generator import RosterPDFGenerator
from socroster.output.text_report import SHIFT_ABBREVIATIONS, TextReportGenerator
from socroster.reporting.portal_grouper import (
    category_counts,
    filter_records,
    group_by_url,
)
from socroster.reporting.shift_summary import ShiftSummaryAggregator
from socroster.reporting.week_grouper import current_week_index, group_by_week
from socroster.validation.validator import DataQualityValidator
from socroster.workflow.shift_requests import (
    ShiftChangeRequest,
    apply_shift_exchange,
    apply_take_leave,
)

logger = logging.getLogger("socroster")

# Rotation used for sample rosters; weekends are OFFDAY.
SAMPLE_ROTATION = [
    ShiftCode.MORNING,
    ShiftCode.NOON,
    ShiftCode.EVENING,
    ShiftCode.NIGHT,
    ShiftCode.REGULAR,
]


def create_sample_roster(
    year: int,
    month: int,
    members: list[str],
    config: Optional[RosterConfig] = None,
) -> list[RosterDay]:
    """Create a sample month with a rotating shift pattern.

    Each member starts the rotation at a different offset. The first member
    takes a day of leave on the 10th, covered by the second member, and the
    third and fourth members swap shifts on the 12th.
    """
    config = config or RosterConfig(members=members)
    weekend = config.weekend_policy()
    days = blank_month(year, month, members)

    for day_index, day in enumerate(days):
        for offset, member in enumerate(members):
            if weekend.is_weekend(day.date):
                code = ShiftCode.OFFDAY
            else:
                code = SAMPLE_ROTATION[(day_index + offset) % len(SAMPLE_ROTATION)]
            day.shifts[member.lower()] = code.value

    filed = datetime(year, month, 1, 9, 0)
    if len(members) >= 2 and len(days) >= 10:
        target = days[9]
        if target.shift_for(members[0]) not in (None, ShiftCode.OFFDAY):
            request = ShiftChangeRequest(
                date=target.date,
                assigned_to=members[1],
                reason="Family event",
                communicated_person="Team lead",
            )
            days[9], _ = apply_take_leave(
                target, members[0], request, requested_by="SAMPLE",
                created_at=filed, handover_default=config.handover_default,
            )
    if len(members) >= 4 and len(days) >= 12:
        target = days[11]
        if target.shift_for(members[2]) != target.shift_for(members[3]):
            request = ShiftChangeRequest(
                date=target.date,
                assigned_to=members[3],
                reason="Personal errand",
                communicated_person="Team lead",
            )
            try:
                days[11], _ = apply_shift_exchange(
                    target, members[2], request, requested_by="SAMPLE",
                    created_at=filed, handover_default=config.handover_default,
                )
            except RosterChangeError as exc:
                logger.debug("Sample exchange skipped: %s", exc)

    return days


def _load_roster(path: str) -> list[RosterDay]:
    return load_roster_payload(read_json(path)).days


def _load_portals(path: str) -> list[PortalAccessRecord]:
    return load_portal_payload(read_json(path))


def _resolve_month(days: list[RosterDay], year: Optional[int], month: Optional[int]):
    if (year is None) != (month is None):
        raise InvalidArgument("--year and --month must be given together")
    if year is not None:
        return year, month
    if days:
        return days[0].date.year, days[0].date.month
    today = date.today()
    return today.year, today.month


def run_weeks(path: str, member: Optional[str] = None) -> None:
    """Print the roster grouped into Sunday-started weeks."""
    days = _load_roster(path)
    weeks = group_by_week(days)
    current = current_week_index(weeks, date.today())

    print(f"{len(days)} days in {len(weeks)} weeks")
    for index, week in enumerate(weeks):
        marker = " (current)" if index == current and week.contains(date.today()) else ""
        print(f"\nWeek {index + 1}: {week.start_date} to {week.end_date}{marker}")
        for day in week:
            if member:
                code = day.shift_for(member)
                label = code.value if code else (day.raw_shift(member) or "-")
                print(f"  {day.date} {day.day:<9} {label}")
            else:
                print(f"  {day.date} {day.day:<9} {len(day.notes)} note(s)")


def run_summary(
    path: str,
    config: RosterConfig,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> None:
    """Print the monthly shift summary."""
    days = _load_roster(path)
    year, month = _resolve_month(days, year, month)
    aggregator = ShiftSummaryAggregator(config.weekend_policy())
    summaries = aggregator.summarize(days, config.members, year, month)

    generator = TextReportGenerator(config.weekend_policy())
    print(f"Summary for {date(year, month, 1).strftime('%B %Y')}")
    print(generator.summary_report(summaries))


def run_portals(
    path: str,
    search: Optional[str] = None,
    category: Optional[str] = None,
    show_passwords: bool = False,
) -> None:
    """Print tracked portals grouped by URL."""
    records = filter_records(_load_portals(path), search=search, category=category)
    groups = group_by_url(records)

    print(TextReportGenerator().portal_report(groups, show_passwords=show_passwords))
    counts = category_counts(records)
    if counts:
        print("\nRecords per category:")
        for name in sorted(counts):
            print(f"  {name or '(none)'}: {counts[name]}")


def run_check(path: str, config: RosterConfig, portals: bool = False) -> int:
    """Validate a roster or portal file and print the findings."""
    validator = DataQualityValidator()
    if portals:
        result = validator.validate_portals(_load_portals(path))
    else:
        result = validator.validate_roster(_load_roster(path), config.members)

    if result.is_valid:
        print("Validation: PASSED")
    else:
        print(f"Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors:
            print(f"    - {error}")

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings[:20]:
            print(f"    - {warning}")
        if len(result.warnings) > 20:
            print(f"    ... and {len(result.warnings) - 20} more warnings")

    return 0 if result.is_valid else 1


def run_report(
    path: str,
    output_path: str,
    config: RosterConfig,
    pdf: bool = False,
) -> None:
    """Write a full roster report as text or PDF."""
    days = _load_roster(path)
    year, month = _resolve_month(days, None, None)
    policy = config.weekend_policy()
    summaries = ShiftSummaryAggregator(policy).summarize(days, config.members, year, month)

    if pdf:
        RosterPDFGenerator(weekend_policy=policy).generate(
            days, summaries, config.members, output_path
        )
    else:
        generator = TextReportGenerator(policy)
        generator.write(generator.roster_report(days, summaries, config.members), output_path)
    print(f"Report written to {output_path}")


def run_demo(config: RosterConfig, year: int, month: int) -> None:
    """Build a sample month and print its weekly layout and summary."""
    print(f"Generating sample roster for {len(config.members)} members...")
    days = create_sample_roster(year, month, config.members, config)
    policy = config.weekend_policy()
    summaries = ShiftSummaryAggregator(policy).summarize(days, config.members, year, month)

    generator = TextReportGenerator(policy)
    print(generator.roster_report(days, summaries, config.members))

    result = DataQualityValidator().validate_roster(days, config.members)
    if result.is_valid:
        print("\nValidation: PASSED")
    else:
        print(f"\nValidation: FAILED ({len(result.errors)} errors)")

    print("\nLegend: " + ", ".join(
        f"{abbr}={code.value}" for code, abbr in SHIFT_ABBREVIATIONS.items()
    ))


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="SOC Roster - roster and portal reporting tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                          Sample roster for the current month
  %(prog)s demo --year 2024 --month 2    Sample roster for February 2024

  %(prog)s weeks -i roster.json          Roster grouped by week
  %(prog)s weeks -i roster.json -m sizan One member's shifts by week
  %(prog)s summary -i roster.json        Monthly shift summary with gaps

  %(prog)s portals -i portals.json       Tracked portals grouped by URL
  %(prog)s check -i portals.json --portals
  %(prog)s report -i roster.json -o roster.pdf --pdf
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="JSON config file (members, weekend_days, handover_default)",
    )
    # Shared by the commands that report per member
    members_parent = argparse.ArgumentParser(add_help=False)
    members_parent.add_argument(
        "--members",
        type=str,
        help="Comma-separated member names (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    weeks_parser = subparsers.add_parser("weeks", help="Show a roster grouped by week")
    weeks_parser.add_argument("--input", "-i", required=True, help="Roster JSON file")
    weeks_parser.add_argument("--member", "-m", help="Show this member's shifts")

    summary_parser = subparsers.add_parser(
        "summary", parents=[members_parent], help="Show monthly shift summary"
    )
    summary_parser.add_argument("--input", "-i", required=True, help="Roster JSON file")
    summary_parser.add_argument("--year", "-y", type=int, help="Year (default: from data)")
    summary_parser.add_argument("--month", type=int, help="Month 1-12 (default: from data)")

    portals_parser = subparsers.add_parser("portals", help="Show portals grouped by URL")
    portals_parser.add_argument("--input", "-i", required=True, help="Portal JSON file")
    portals_parser.add_argument("--search", "-s", help="Free-text filter")
    portals_parser.add_argument("--category", "-c", help="Category filter ('all' for none)")
    portals_parser.add_argument(
        "--show-passwords",
        action="store_true",
        help="Print stored passwords instead of masking them",
    )

    check_parser = subparsers.add_parser(
        "check", parents=[members_parent], help="Report data-quality issues"
    )
    check_parser.add_argument("--input", "-i", required=True, help="Roster or portal JSON file")
    check_parser.add_argument(
        "--portals",
        action="store_true",
        help="Treat the input as portal records",
    )

    report_parser = subparsers.add_parser(
        "report", parents=[members_parent], help="Write a roster report"
    )
    report_parser.add_argument("--input", "-i", required=True, help="Roster JSON file")
    report_parser.add_argument("--output", "-o", required=True, help="Output file path")
    report_parser.add_argument("--pdf", action="store_true", help="Write PDF instead of text")

    today = date.today()
    demo_parser = subparsers.add_parser(
        "demo", parents=[members_parent], help="Generate and show a sample roster"
    )
    demo_parser.add_argument("--year", "-y", type=int, default=today.year)
    demo_parser.add_argument("--month", type=int, default=today.month)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s:%(message)s",
    )

    try:
        config = RosterConfig.load(args.config) if args.config else RosterConfig()
        members = getattr(args, "members", None)
        if members:
            config.members = [m.strip() for m in members.split(",") if m.strip()]

        if args.command == "weeks":
            run_weeks(args.input, args.member)
            return 0
        elif args.command == "summary":
            run_summary(args.input, config, args.year, args.month)
            return 0
        elif args.command == "portals":
            run_portals(args.input, args.search, args.category, args.show_passwords)
            return 0
        elif args.command == "check":
            return run_check(args.input, config, args.portals)
        elif args.command == "report":
            run_report(args.input, args.output, config, args.pdf)
            return 0
        elif args.command == "demo":
            run_demo(config, args.year, args.month)
            return 0
        else:
            parser.print_help()
            return 1
    except (InvalidArgument, RosterChangeError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
