"""
Business logic for guests.

``GuestService`` reads and writes the ``convidados`` table.  Missing
rows are reported with ``ValueError`` which the routers turn into 404
responses.
"""

import logging
from typing import List

from ...core.db import get_connection
from ...schemas.guest import Guest, GuestCreate

logger = logging.getLogger(__name__)


def _row_to_guest(row) -> Guest:
    return Guest(convidado_id=row["convidado_id"], nome=row["nome"], presenca=row["presenca"])


class GuestService:
    """Persistence operations for the guest list."""

    @classmethod
    async def list_guests(cls) -> List[Guest]:
        """Return every guest ordered by identifier."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT convidado_id, nome, presenca FROM convidados ORDER BY convidado_id"
            ).fetchall()
            return [_row_to_guest(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def create_guest(cls, data: GuestCreate, current_user: dict) -> Guest:
        logger.info("User %s is adding guest %r", current_user.get("sub"), data.nome)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO convidados (nome, presenca) VALUES (?, ?)",
                (data.nome, data.presenca.value),
            )
            guest_id = cursor.lastrowid
            conn.commit()
            return Guest(convidado_id=guest_id, nome=data.nome, presenca=data.presenca)
        finally:
            conn.close()

    @classmethod
    async def update_guest(cls, guest_id: int, data: GuestCreate, current_user: dict) -> Guest:
        """Replace name and attendance of an existing guest.

        Raises ``ValueError`` when no guest has ``guest_id``.
        """
        logger.info("User %s is updating guest %s", current_user.get("sub"), guest_id)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE convidados SET nome = ?, presenca = ?, updated_at = CURRENT_TIMESTAMP "
                "WHERE convidado_id = ?",
                (data.nome, data.presenca.value, guest_id),
            )
            if cursor.rowcount == 0:
                raise ValueError("Guest not found")
            conn.commit()
            return Guest(convidado_id=guest_id, nome=data.nome, presenca=data.presenca)
        finally:
            conn.close()

    @classmethod
    async def delete_guest(cls, guest_id: int, current_user: dict) -> None:
        """Remove a guest.  Raises ``ValueError`` when it does not exist."""
        logger.info("User %s is removing guest %s", current_user.get("sub"), guest_id)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM convidados WHERE convidado_id = ?", (guest_id,))
            if cursor.rowcount == 0:
                raise ValueError("Guest not found")
            conn.commit()
        finally:
            conn.close()
