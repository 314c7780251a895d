"""Domain models for the roster reporting system.

This module contains the core data structures: daily roster rows, shift
change notes, per-member summaries, tracked portal credentials and the
configuration shared by the reporting components.

All models are snapshots of what the upstream API returned. Parsing is
lenient: unknown shift codes and inconsistent portal metadata are kept as-is
and left for the validator to report.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from socroster.domain.dates import (
    month_dates,
    parse_date,
    parse_timestamp,
    roster_id,
    weekday_name,
)
from socroster.domain.policies import FixedWeekendPolicy, WeekendPolicy
from socroster.errors import InvalidArgument

# Marker meaning "varies per person, not centrally tracked".
INDIVIDUAL = "Individual"

DEFAULT_HANDOVER = "No Dependency"

DEFAULT_MEMBERS = [
    "Tanvir",
    "Sizan",
    "Nazmul",
    "Maruf",
    "Bishwajit",
    "Borno",
    "Anupom",
    "Nafiz",
    "Prattay",
    "Siam",
    "Minhadul",
]

# Columns of a roster row that are not team members.
RESERVED_ROSTER_KEYS = frozenset(
    {
        "serial",
        "roster_id",
        "rosterId",
        "date",
        "day",
        "upload_by",
        "uploadBy",
        "created_at",
        "createdAt",
        "updated_at",
        "updatedAt",
        "notes",
    }
)


def _pick(data: dict, *keys, default=None):
    """Return the first present key, accepting snake_case and camelCase."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


class ShiftCode(Enum):
    """Duty category of a team member on a given day."""

    REGULAR = "REGULAR"
    MORNING = "MORNING"
    NOON = "NOON"
    EVENING = "EVENING"
    NIGHT = "NIGHT"
    OFFDAY = "OFFDAY"
    LEAVE = "LEAVE"

    @classmethod
    def parse(cls, value) -> Optional["ShiftCode"]:
        """Match a raw roster value, returning None when unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_workday(self) -> bool:
        """Whether this shift counts towards worked days."""
        return self not in (ShiftCode.OFFDAY, ShiftCode.LEAVE)


WORKDAY_CODES = tuple(code for code in ShiftCode if code.is_workday)


class NoteType(Enum):
    """Kind of shift change recorded against a roster day."""

    SHIFT_EXCHANGE = "Shift Exchange"
    TAKE_LEAVE = "Take Leave"

    @classmethod
    def parse(cls, value) -> "NoteType":
        if isinstance(value, cls):
            return value
        compact = str(value or "").replace(" ", "").replace("_", "").lower()
        for member in cls:
            if member.value.replace(" ", "").lower() == compact:
                return member
        raise InvalidArgument(f"Unknown shift change note type: {value!r}")


@dataclass
class ShiftChangeNote:
    """A shift exchange or leave request affecting one member on one day.

    Attributes:
        note_type: Exchange or leave.
        request_date: Date the request concerns.
        created_at: When the request was filed.
        requested_by: Portal id of the requester.
        requested_by_name: Short name of the requester.
        your_shift: Requester's raw shift value before the change.
        updated_shift: Requester's raw shift value after the change.
        assigned_to: Counterpart member, or None for uncovered leave.
        reason: Free-text reason.
        handover_task: Free-text handover notes.
        communicated_person: Who was informed of the change.
    """

    note_type: NoteType
    request_date: date
    requested_by: str
    your_shift: Optional[str]
    updated_shift: Optional[str]
    requested_by_name: str = ""
    assigned_to: Optional[str] = None
    reason: str = ""
    handover_task: str = DEFAULT_HANDOVER
    communicated_person: str = ""
    created_at: Optional[datetime] = None

    @property
    def your_shift_code(self) -> Optional[ShiftCode]:
        return ShiftCode.parse(self.your_shift)

    @property
    def updated_shift_code(self) -> Optional[ShiftCode]:
        return ShiftCode.parse(self.updated_shift)

    @classmethod
    def from_dict(cls, data: dict, tz: Optional[tzinfo] = None) -> "ShiftChangeNote":
        assigned_to = _pick(data, "assigned_to", "assignedTo")
        if assigned_to == "None":
            assigned_to = None
        return cls(
            note_type=NoteType.parse(_pick(data, "type", "note_type", "noteType")),
            request_date=parse_date(_pick(data, "request_date", "requestDate"), tz),
            created_at=parse_timestamp(_pick(data, "created_at", "createdAt")),
            requested_by=str(_pick(data, "requested_by", "requestedBy", default="")),
            requested_by_name=str(
                _pick(data, "requested_by_name", "requestedByName", default="")
            ),
            your_shift=_pick(data, "your_shift", "yourShift"),
            updated_shift=_pick(data, "updated_shift", "updatedShift"),
            assigned_to=assigned_to,
            reason=str(_pick(data, "reason", default="")),
            handover_task=str(
                _pick(data, "handover_task", "handoverTask", default=DEFAULT_HANDOVER)
            ),
            communicated_person=str(
                _pick(data, "communicated_person", "communicatedPerson", default="")
            ),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.note_type.value,
            "request_date": self.request_date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "requested_by": self.requested_by,
            "requested_by_name": self.requested_by_name,
            "your_shift": self.your_shift,
            "updated_shift": self.updated_shift,
            "assigned_to": self.assigned_to,
            "reason": self.reason,
            "handover_task": self.handover_task,
            "communicated_person": self.communicated_person,
        }


@dataclass
class RosterDay:
    """One calendar date of a monthly roster.

    Attributes:
        date: Calendar date of the row.
        day: Weekday name as stored upstream.
        shifts: Lower-cased member short name -> raw shift value (or None).
        notes: Shift change notes for this date, newest first.
        roster_id: Identifier of the monthly roster the row belongs to.
    """

    date: date
    day: str = ""
    shifts: dict[str, Optional[str]] = field(default_factory=dict)
    notes: list[ShiftChangeNote] = field(default_factory=list)
    roster_id: Optional[str] = None

    def __post_init__(self):
        if not self.day:
            self.day = weekday_name(self.date)
        self.shifts = {key.lower(): value for key, value in self.shifts.items()}

    @property
    def is_sunday(self) -> bool:
        return self.date.weekday() == 6

    @property
    def members(self) -> list[str]:
        """Member columns present on this row."""
        return list(self.shifts)

    def raw_shift(self, member: str) -> Optional[str]:
        """Raw value stored for a member, looked up case-insensitively."""
        return self.shifts.get(member.lower())

    def shift_for(self, member: str) -> Optional[ShiftCode]:
        """Recognized shift code for a member, or None."""
        return ShiftCode.parse(self.raw_shift(member))

    @classmethod
    def from_dict(cls, data: dict, tz: Optional[tzinfo] = None) -> "RosterDay":
        """Build a row from an upstream JSON object.

        Every key that is not a reserved roster column is treated as a team
        member column. ``tz`` is passed to ``parse_date`` for timestamped dates.
        """
        if not isinstance(data, dict):
            raise InvalidArgument(
                f"Roster row must be an object, got {type(data).__name__}"
            )
        if "date" not in data:
            raise InvalidArgument("Roster row is missing its date")
        shifts = {
            key: value
            for key, value in data.items()
            if key not in RESERVED_ROSTER_KEYS
        }
        notes = [ShiftChangeNote.from_dict(n, tz) for n in data.get("notes") or []]
        return cls(
            date=parse_date(data["date"], tz),
            day=str(data.get("day") or ""),
            shifts=shifts,
            notes=notes,
            roster_id=_pick(data, "roster_id", "rosterId"),
        )

    def to_dict(self) -> dict:
        result = {
            "date": self.date.isoformat(),
            "day": self.day,
        }
        if self.roster_id:
            result["roster_id"] = self.roster_id
        result.update(self.shifts)
        result["notes"] = [note.to_dict() for note in self.notes]
        return result


def blank_month(year: int, month: int, members: list[str]) -> list[RosterDay]:
    """One empty roster row per date of the month, every member unset."""
    rid = roster_id(month, year)
    return [
        RosterDay(
            date=d,
            shifts={member: None for member in members},
            roster_id=rid,
        )
        for d in month_dates(year, month)
    ]


@dataclass
class WeekGroup:
    """A run of consecutive roster days, starting on Sunday except possibly the first."""

    days: list[RosterDay] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self):
        return iter(self.days)

    @property
    def start_date(self) -> Optional[date]:
        return self.days[0].date if self.days else None

    @property
    def end_date(self) -> Optional[date]:
        return self.days[-1].date if self.days else None

    def contains(self, target: date) -> bool:
        return any(d.date == target for d in self.days)


@dataclass
class MemberShiftSummary:
    """Monthly shift tally for one team member.

    Attributes:
        member: Member display name.
        counts: Number of days on each shift code.
        total_workdays_in_month: Nominal workdays of the month.
        unrecognized: Days whose value was present but not a valid code.
    """

    member: str
    counts: dict[ShiftCode, int] = field(
        default_factory=lambda: {code: 0 for code in ShiftCode}
    )
    total_workdays_in_month: int = 0
    unrecognized: int = 0

    def count(self, code: ShiftCode) -> int:
        return self.counts.get(code, 0)

    @property
    def workdays(self) -> int:
        """Days on a working shift (REGULAR, MORNING, NOON, EVENING, NIGHT)."""
        return sum(self.count(code) for code in WORKDAY_CODES)

    @property
    def gap(self) -> int:
        """Worked plus leave days minus the month's nominal workdays."""
        return self.workdays + self.count(ShiftCode.LEAVE) - self.total_workdays_in_month

    @property
    def total_counted(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> dict:
        result = {code.value: self.count(code) for code in ShiftCode}
        result["WORKDAYS"] = self.workdays
        result["GAP"] = self.gap
        result["UNRECOGNIZED"] = self.unrecognized
        return result


@dataclass
class PortalAccessRecord:
    """A tracked credential/role binding for an external portal.

    ``user_identifier`` and ``password`` may hold the literal ``"Individual"``
    meaning the value differs per person and is not tracked centrally.
    """

    id: str
    portal_url: str
    portal_name: str = ""
    portal_category: str = ""
    role: str = ""
    user_identifier: str = ""
    password: str = ""
    tracked_by: str = ""
    remark: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def identifier_is_individual(self) -> bool:
        return self.user_identifier == INDIVIDUAL

    @property
    def password_is_individual(self) -> bool:
        return self.password == INDIVIDUAL

    def masked_password(self) -> str:
        """Password safe for display."""
        if self.password_is_individual or not self.password:
            return self.password
        return "*" * 8

    @classmethod
    def from_dict(cls, data: dict) -> "PortalAccessRecord":
        if not isinstance(data, dict):
            raise InvalidArgument(
                f"Portal record must be an object, got {type(data).__name__}"
            )
        url = _pick(data, "portal_url", "portalUrl")
        if url is None:
            raise InvalidArgument("Portal record is missing its portal_url")
        return cls(
            id=str(_pick(data, "pt_id", "id", default="")),
            portal_url=str(url),
            portal_name=str(_pick(data, "portal_name", "portalName", default="")),
            portal_category=str(
                _pick(data, "portal_category", "portalCategory", default="")
            ),
            role=str(_pick(data, "role", default="")),
            user_identifier=str(
                _pick(data, "user_identifier", "userIdentifier", default="")
            ),
            password=str(_pick(data, "password", default="")),
            tracked_by=str(_pick(data, "track_by", "tracked_by", "trackedBy", default="")),
            remark=str(_pick(data, "remark", default="")),
            created_at=parse_timestamp(_pick(data, "created_at", "createdAt")),
            updated_at=parse_timestamp(_pick(data, "updated_at", "updatedAt")),
        )

    def to_dict(self) -> dict:
        return {
            "pt_id": self.id,
            "portal_url": self.portal_url,
            "portal_name": self.portal_name,
            "portal_category": self.portal_category,
            "role": self.role,
            "user_identifier": self.user_identifier,
            "password": self.password,
            "track_by": self.tracked_by,
            "remark": self.remark,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class PortalGroup:
    """All access records sharing one portal URL.

    ``portal_name`` and ``portal_category`` come from the first record after
    the role sort.
    """

    portal_url: str
    portal_name: str = ""
    portal_category: str = ""
    portals: list[PortalAccessRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.portals)

    @property
    def roles(self) -> list[str]:
        return [p.role for p in self.portals]


@dataclass
class RosterConfig:
    """Configuration shared by the reporting components and the CLI.

    Attributes:
        members: Team member display names, in report order.
        weekend_days: Weekday names treated as the organisation's weekend.
        handover_default: Handover text recorded when a request leaves it blank.
    """

    members: list[str] = field(default_factory=lambda: list(DEFAULT_MEMBERS))
    weekend_days: list[str] = field(default_factory=lambda: ["Friday", "Saturday"])
    handover_default: str = DEFAULT_HANDOVER

    def weekend_policy(self) -> WeekendPolicy:
        return FixedWeekendPolicy.from_names(self.weekend_days)

    @classmethod
    def from_dict(cls, data: dict) -> "RosterConfig":
        config = cls()
        if "members" in data:
            config.members = [str(m) for m in data["members"]]
        if "weekend_days" in data:
            config.weekend_days = [str(d) for d in data["weekend_days"]]
        if "handover_default" in data:
            config.handover_default = str(data["handover_default"])
        # Fail early on unknown weekday names.
        config.weekend_policy()
        return config

    @classmethod
    def load(cls, path: Union[str, Path]) -> "RosterConfig":
        """Load configuration from a JSON file."""
        try:
            with open(path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidArgument(f"Config file {path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise InvalidArgument(f"Config file {path} must contain a JSON object")
        return cls.from_dict(data)
