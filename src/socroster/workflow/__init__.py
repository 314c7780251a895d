"""Shift exchange and leave workflow over roster snapshots."""

from socroster.workflow.shift_requests import (
    ShiftChangeRequest,
    apply_shift_exchange,
    apply_take_leave,
)

__all__ = [
    "ShiftChangeRequest",
    "apply_shift_exchange",
    "apply_take_leave",
]
