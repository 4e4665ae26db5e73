#!/usr/bin/env python3
"""
Reset a user's password in the Contact Keeper SQLite database.

Existing passwords are never read or shown.  The script stores a new
PBKDF2-HMAC-SHA256 hash ("salthex$hashhex") for the given email.

Usage:
    python reset_password.py --db ./contact_keeper.db --email jane@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sqlite3
import sys

from contact_keeper_api.app.core.security import hash_password
from contact_keeper_api.app.services.user_service import MIN_PASSWORD_LENGTH


def main():
    ap = argparse.ArgumentParser(description="Reset a Contact Keeper user's password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to the SQLite DB file (e.g. ./contact_keeper.db)")
    ap.add_argument("--email", required=True, help="User email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        print(f"[!] Password must have {MIN_PASSWORD_LENGTH} or more characters.", file=sys.stderr)
        sys.exit(1)

    conn = sqlite3.connect(args.db)
    try:
        cur = conn.cursor()
        email = args.email.lower()
        cur.execute("SELECT id FROM users WHERE email = ?", (email,))
        if not cur.fetchone():
            print(f"[!] No user found with email: {email}", file=sys.stderr)
            sys.exit(2)

        cur.execute("UPDATE users SET password = ? WHERE email = ?", (hash_password(new_password), email))
        conn.commit()
        print(f"[+] Password updated for user: {email}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
