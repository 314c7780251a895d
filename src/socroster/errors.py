"""Exceptions raised by the roster reporting package."""

from collections.abc import Iterable, Mapping


class InvalidArgument(ValueError):
    """Raised when a caller passes input the package cannot interpret.

    Covers out-of-range months, non-sequence collections, malformed dates
    and upstream envelopes that report failure.
    """


class RosterChangeError(Exception):
    """Raised when a shift change request cannot be applied to a roster day."""

    def __init__(self, message: str, member: str = ""):
        super().__init__(message)
        self.message = message
        self.member = member


def ensure_sequence(value, name: str) -> list:
    """Materialize an iterable of records, rejecting scalars and mappings."""
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise InvalidArgument(
            f"{name} must be a sequence of records, got {type(value).__name__}"
        )
    return list(value)
