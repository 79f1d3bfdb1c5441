"""
Business logic for admin accounts.
"""

import logging
from typing import Optional

from ...core.db import get_connection
from ...core.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Lookup and maintenance of the accounts allowed to log in."""

    @classmethod
    async def authenticate(cls, email: str, password: str) -> Optional[dict]:
        """Return the account for ``email`` if ``password`` matches.

        Disabled accounts never authenticate.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, email, password, disabled FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        finally:
            conn.close()
        if not row or row["disabled"]:
            return None
        if not verify_password(password, row["password"]):
            return None
        return {"id": row["id"], "email": row["email"]}

    @classmethod
    def set_password(cls, email: str, password: str) -> bool:
        """Set the password of ``email``, creating the account if needed.

        Returns ``True`` when a new account was created.
        """
        hashed = hash_password(password)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE users SET password = ?, updated_at = CURRENT_TIMESTAMP WHERE email = ?",
                (hashed, email),
            )
            created = cursor.rowcount == 0
            if created:
                cursor.execute("INSERT INTO users (email, password) VALUES (?, ?)", (email, hashed))
            conn.commit()
        finally:
            conn.close()
        logger.info("%s account %s", "Created" if created else "Updated password for", email)
        return created
