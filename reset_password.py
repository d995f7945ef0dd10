#!/usr/bin/env python3
"""
Reset a customer's password in the bookstore SQLite database.

The script never reads or reveals the existing password.  It stores a
new PBKDF2 hash (format "salthex$hashhex") for the given email.

Usage:
    python reset_password.py --db ./bookstore.db --email ana@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sys

from bookstore_api.app.core.db import get_cursor
from bookstore_api.app.core.security import hash_password


def main() -> int:
    ap = argparse.ArgumentParser(description="Reset a bookstore customer's password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to the SQLite DB file (e.g. ./bookstore.db)")
    ap.add_argument("--email", required=True, help="Customer email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        return 1

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1

    with get_cursor(args.db) as cur:
        cur.execute(
            "UPDATE customers SET password = ?, updated_at = CURRENT_TIMESTAMP WHERE email = ?",
            (hash_password(new_password), args.email),
        )
        updated = cur.rowcount

    if not updated:
        print(f"[!] No customer found with email: {args.email}", file=sys.stderr)
        return 2
    print(f"[+] Password updated for customer: {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
