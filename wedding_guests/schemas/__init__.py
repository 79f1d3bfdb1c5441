"""
Pydantic schema definitions for API payloads.

Schemas are shared by the admin client, which parses server responses
with them, and the development backend, which validates request bodies
with them.
"""

from .auth import Token
from .guest import (
    ATTENDANCE_LABELS,
    AttendanceStatus,
    Guest,
    GuestCreate,
    GuestUpdate,
    attendance_label,
)

__all__ = [
    "ATTENDANCE_LABELS",
    "AttendanceStatus",
    "Guest",
    "GuestCreate",
    "GuestUpdate",
    "Token",
    "attendance_label",
]
