#!/usr/bin/env python3
"""
Set an admin password in the development backend's SQLite database.

Creates the account when it does not exist yet.  Existing passwords are
never read or shown; the new one is stored as a PBKDF2-HMAC-SHA256 hash.

Usage:
    python reset_password.py --db ./wedding_guests.db --email admin@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sys

from wedding_guests.core.config import settings
from wedding_guests.core.db import init_db
from wedding_guests.app.services.user_service import UserService


def main() -> None:
    ap = argparse.ArgumentParser(description="Set an admin password for the guest list backend.")
    ap.add_argument("--db", help="Path to SQLite DB file (default: $DATABASE_URL)")
    ap.add_argument("--email", required=True, help="Admin email to create or update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if args.db:
        settings.database_url = os.path.abspath(args.db)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    init_db()
    created = UserService.set_password(args.email, new_password)
    if created:
        print(f"[+] Account created: {args.email}")
    else:
        print(f"[+] Password updated for: {args.email}")


if __name__ == "__main__":
    main()
