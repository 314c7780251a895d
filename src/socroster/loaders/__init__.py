"""Parsing of upstream JSON payloads into domain models."""

from socroster.loaders.json_loader import (
    RosterPayload,
    load_portal_payload,
    load_roster_payload,
    read_json,
)

__all__ = [
    "RosterPayload",
    "load_portal_payload",
    "load_roster_payload",
    "read_json",
]
