"""
Pydantic models for guest records.

Field names follow the backend's wire format (``convidado_id``,
``nome``, ``presenca``).  ``Guest`` is what the admin client reads back
from the backend; ``GuestCreate`` and ``GuestUpdate`` are the request
bodies the development backend validates.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AttendanceStatus(str, Enum):
    """Attendance status of a guest, as sent on the wire."""

    UNCONFIRMED = "nao_confirmado"
    ATTENDING = "vai"
    NOT_ATTENDING = "nao_vai"

    @property
    def label(self) -> str:
        return ATTENDANCE_LABELS[self]


ATTENDANCE_LABELS = {
    AttendanceStatus.UNCONFIRMED: "Pending",
    AttendanceStatus.ATTENDING: "Confirmed",
    AttendanceStatus.NOT_ATTENDING: "Not coming",
}


def attendance_label(value: Union[AttendanceStatus, str]) -> str:
    """Human readable label; statuses this client does not know are shown as sent."""
    try:
        return AttendanceStatus(value).label
    except ValueError:
        return str(value)


class GuestBase(BaseModel):
    nome: str = Field(..., examples=["Ana"])
    presenca: AttendanceStatus = Field(AttendanceStatus.UNCONFIRMED, examples=["vai"])


class GuestCreate(GuestBase):
    """Schema for creating a guest."""
    pass


class GuestUpdate(GuestBase):
    """Full replacement body for ``PUT /convidados/{id}``."""

    convidado_id: Optional[Union[int, str]] = None

    model_config = ConfigDict(extra="allow")


class Guest(GuestBase):
    """A guest record.

    The identifier is assigned by the server and treated as opaque.
    Unknown fields returned by the server are preserved so that an
    update can resend the full record.  A ``presenca`` value outside
    :class:`AttendanceStatus` is kept as the raw string.
    """

    convidado_id: Optional[Union[int, str]] = Field(None, examples=[7])
    presenca: Union[AttendanceStatus, str] = Field(
        AttendanceStatus.UNCONFIRMED, examples=["vai"], union_mode="left_to_right"
    )

    model_config = ConfigDict(extra="allow", from_attributes=True)

    @property
    def has_id(self) -> bool:
        # 0 and "" mean "no identifier": saving such a record creates it.
        return bool(self.convidado_id)

    @property
    def status_label(self) -> str:
        return attendance_label(self.presenca)

    def is_blank(self) -> bool:
        return not self.nome.strip()
