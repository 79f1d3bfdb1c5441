"""Mint a long-lived access token for the development backend.

Usage:
    python create_token.py admin@example.com [days]

The account must exist (see ``reset_password.py``) or the backend will
answer 401 to requests carrying the token.
"""
import sys

from wedding_guests.core.security import create_access_token


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__, file=sys.stderr)
        sys.exit(1)
    email = sys.argv[1]
    days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
    print(create_access_token({"sub": email}, expires_delta=days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
