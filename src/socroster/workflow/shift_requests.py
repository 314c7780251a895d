"""Shift exchange and leave requests applied to a roster day.

Both operations take a snapshot ``RosterDay`` and return a new one together
with the ``ShiftChangeNote`` describing the change. The input row is never
modified.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from socroster.domain.dates import parse_date
from socroster.domain.models import (
    DEFAULT_HANDOVER,
    NoteType,
    RosterDay,
    ShiftChangeNote,
    ShiftCode,
)
from socroster.errors import InvalidArgument, RosterChangeError

logger = logging.getLogger(__name__)

NO_COVERAGE = "None"


@dataclass
class ShiftChangeRequest:
    """Body of a shift exchange or leave request.

    Attributes:
        date: Roster date the request concerns.
        assigned_to: Counterpart member, or None for leave without coverage.
        reason: Why the change is needed.
        handover_task: Work handed over; blank means the default text.
        communicated_person: Who was informed of the change.
    """

    date: Optional[date]
    assigned_to: Optional[str] = None
    reason: str = ""
    handover_task: str = ""
    communicated_person: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ShiftChangeRequest":
        raw_date = data.get("date")
        assigned_to = data.get("assignedTo", data.get("assigned_to"))
        return cls(
            date=parse_date(raw_date) if raw_date else None,
            assigned_to=assigned_to or None,
            reason=(data.get("reason") or "").strip(),
            handover_task=(data.get("handoverTask", data.get("handover_task")) or "").strip(),
            communicated_person=(
                data.get("communicatedPerson", data.get("communicated_person")) or ""
            ).strip(),
        )

    @property
    def counterpart(self) -> Optional[str]:
        """Assigned member, treating the "None" sentinel as no one."""
        if not self.assigned_to or self.assigned_to == NO_COVERAGE:
            return None
        return self.assigned_to


def _check_date(day: RosterDay, request: ShiftChangeRequest) -> None:
    if request.date != day.date:
        raise InvalidArgument(
            f"Request date {request.date} does not match roster date {day.date}"
        )


def _current_shift(day: RosterDay, member: str, message: str) -> str:
    raw = day.raw_shift(member)
    if not raw:
        raise RosterChangeError(message, member=member)
    return raw


def apply_shift_exchange(
    day: RosterDay,
    requester: str,
    request: ShiftChangeRequest,
    requested_by: str,
    created_at: Optional[datetime] = None,
    handover_default: str = DEFAULT_HANDOVER,
) -> tuple[RosterDay, ShiftChangeNote]:
    """Swap the requester's shift with the counterpart's on one day.

    Args:
        day: Roster row for the requested date.
        requester: Short name of the member asking for the exchange.
        request: Request body; ``assigned_to`` names the counterpart.
        requested_by: Portal id recorded on the note.
        created_at: Filing time recorded on the note.
        handover_default: Text used when no handover task was given.

    Returns:
        Tuple of (updated roster row, note recorded for the exchange).

    Raises:
        InvalidArgument: If required fields are missing or the date mismatches.
        RosterChangeError: If either member has no shift, or the shifts are equal.
    """
    if not (request.date and request.counterpart and request.reason
            and request.communicated_person):
        raise InvalidArgument("Missing required fields")
    _check_date(day, request)

    counterpart = request.counterpart
    if counterpart.lower() == requester.lower():
        raise RosterChangeError("Cannot exchange a shift with yourself", member=requester)

    your_shift = _current_shift(
        day, requester, "No shift assigned to you on the selected date"
    )
    their_shift = _current_shift(
        day,
        counterpart,
        "No shift assigned to the selected team member on the selected date",
    )
    if your_shift == their_shift:
        raise RosterChangeError(
            f"{requester} and {counterpart} are both on {your_shift}; nothing to exchange",
            member=counterpart,
        )

    shifts = dict(day.shifts)
    shifts[requester.lower()] = their_shift
    shifts[counterpart.lower()] = your_shift

    note = ShiftChangeNote(
        note_type=NoteType.SHIFT_EXCHANGE,
        request_date=day.date,
        created_at=created_at,
        requested_by=requested_by,
        requested_by_name=requester,
        your_shift=your_shift,
        updated_shift=their_shift,
        assigned_to=counterpart,
        reason=request.reason,
        handover_task=request.handover_task or handover_default,
        communicated_person=request.communicated_person,
    )
    logger.info(
        "Shift exchange on %s: %s %s -> %s with %s",
        day.date, requester, your_shift, their_shift, counterpart,
    )
    return replace(day, shifts=shifts, notes=[note] + list(day.notes)), note


def apply_take_leave(
    day: RosterDay,
    requester: str,
    request: ShiftChangeRequest,
    requested_by: str,
    created_at: Optional[datetime] = None,
    handover_default: str = DEFAULT_HANDOVER,
) -> tuple[RosterDay, ShiftChangeNote]:
    """Put the requester on leave, optionally handing the shift to a counterpart.

    When ``request.assigned_to`` names a member (anything but the "None"
    sentinel) that member must hold a shift and takes over the requester's.

    Raises:
        InvalidArgument: If required fields are missing or the date mismatches.
        RosterChangeError: If the requester or the named counterpart has no shift.
    """
    if not (request.date and request.reason and request.communicated_person):
        raise InvalidArgument("Missing required fields")
    _check_date(day, request)

    your_shift = _current_shift(
        day, requester, "No shift assigned to you on the selected date"
    )

    shifts = dict(day.shifts)
    counterpart = request.counterpart
    if counterpart is not None:
        if counterpart.lower() == requester.lower():
            raise RosterChangeError("Cannot hand your shift to yourself", member=requester)
        _current_shift(
            day,
            counterpart,
            "No shift assigned to the selected team member on the selected date",
        )
        shifts[counterpart.lower()] = your_shift
    shifts[requester.lower()] = ShiftCode.LEAVE.value

    note = ShiftChangeNote(
        note_type=NoteType.TAKE_LEAVE,
        request_date=day.date,
        created_at=created_at,
        requested_by=requested_by,
        requested_by_name=requester,
        your_shift=your_shift,
        updated_shift=ShiftCode.LEAVE.value,
        assigned_to=counterpart,
        reason=request.reason,
        handover_task=request.handover_task or handover_default,
        communicated_person=request.communicated_person,
    )
    logger.info(
        "Leave on %s for %s (was %s), covered by %s",
        day.date, requester, your_shift, counterpart or "nobody",
    )
    return replace(day, shifts=shifts, notes=[note] + list(day.notes)), note
