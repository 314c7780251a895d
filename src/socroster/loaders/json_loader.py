"""Loading of roster and portal data from upstream JSON responses.

The portal API wraps results in an envelope such as
``{"success": true, "data": [...], "user": "tanvir"}``. Both the envelope
and a bare list of rows are accepted.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Optional, Union

from socroster.domain.models import PortalAccessRecord, RosterDay
from socroster.errors import InvalidArgument, ensure_sequence

logger = logging.getLogger(__name__)


@dataclass
class RosterPayload:
    """Roster rows plus the envelope metadata that came with them."""

    days: list[RosterDay] = field(default_factory=list)
    user: Optional[str] = None
    message: Optional[str] = None


def read_json(path: Union[str, Path]):
    """Read and decode a JSON file."""
    try:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"{path} is not valid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise InvalidArgument(f"{path} is not UTF-8 text: {exc}") from exc


def _unwrap(payload, kind: str) -> tuple[list, dict]:
    """Split an envelope into its data rows and remaining metadata."""
    if isinstance(payload, dict):
        if payload.get("success") is False:
            message = payload.get("message") or f"Upstream failed to return {kind}"
            raise InvalidArgument(message)
        if "data" not in payload:
            raise InvalidArgument(f"{kind} payload has no 'data' field")
        return ensure_sequence(payload["data"], f"{kind} data"), payload
    return ensure_sequence(payload, kind), {}


def load_roster_payload(payload, tz: Optional[tzinfo] = None) -> RosterPayload:
    """Parse a roster response into ``RosterDay`` rows.

    ``tz`` converts timestamped dates to a local zone before the date is
    taken; see ``parse_date``.

    Raises:
        InvalidArgument: If the envelope reports failure or rows are malformed.
    """
    rows, meta = _unwrap(payload, "roster")
    days = [RosterDay.from_dict(row, tz) for row in rows]
    logger.debug("Loaded %d roster rows", len(days))
    return RosterPayload(days=days, user=meta.get("user"), message=meta.get("message"))


def load_portal_payload(payload) -> list[PortalAccessRecord]:
    """Parse a portal tracker response into access records."""
    rows, _ = _unwrap(payload, "portal")
    records = [PortalAccessRecord.from_dict(row) for row in rows]
    logger.debug("Loaded %d portal records", len(records))
    return records
