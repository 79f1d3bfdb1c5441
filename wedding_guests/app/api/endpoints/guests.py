"""
Guest endpoints.

CRUD over the guest list.  Every route requires a valid bearer token.
The collection routes answer both with and without a trailing slash,
since clients list on ``/convidados`` and create on ``/convidados/``.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ....core.security import get_current_user
from ....schemas.guest import Guest, GuestCreate, GuestUpdate
from ...services.guest_service import GuestService

router = APIRouter(prefix="/convidados")


def _require_name(data: GuestCreate) -> None:
    if not data.nome.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Guest name cannot be empty.",
        )


@router.get("", response_model=List[Guest])
@router.get("/", response_model=List[Guest], include_in_schema=False)
async def list_guests(current_user: dict = Depends(get_current_user)) -> List[Guest]:
    """Return the whole guest list ordered by identifier."""
    return await GuestService.list_guests()


@router.post("", response_model=Guest, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=Guest, status_code=status.HTTP_201_CREATED)
async def create_guest(
    guest: GuestCreate,
    current_user: dict = Depends(get_current_user),
) -> Guest:
    """Add a guest.  Attendance defaults to ``nao_confirmado``."""
    _require_name(guest)
    return await GuestService.create_guest(guest, current_user)


@router.put("/{convidado_id}", response_model=Guest)
async def update_guest(
    convidado_id: int,
    guest: GuestUpdate,
    current_user: dict = Depends(get_current_user),
) -> Guest:
    """Replace a guest record.

    The body is the full record; if it carries ``convidado_id`` it must
    match the one in the URL.
    """
    if guest.convidado_id not in (None, "") and str(guest.convidado_id) != str(convidado_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Guest identifier in body does not match the URL",
        )
    data = GuestCreate(nome=guest.nome, presenca=guest.presenca)
    _require_name(data)
    try:
        return await GuestService.update_guest(convidado_id, data, current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{convidado_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_guest(
    convidado_id: int,
    current_user: dict = Depends(get_current_user),
) -> None:
    """Remove a guest from the list."""
    try:
        await GuestService.delete_guest(convidado_id, current_user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
