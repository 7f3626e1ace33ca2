"""
Generate a bcrypt hash for ADMIN_PASSWORD_HASHES.

Usage:
    python scripts/hash_admin_password.py
    python scripts/hash_admin_password.py --rounds 13

The password is read interactively so it never lands in shell history.
Hashes are comma-separated in ADMIN_PASSWORD_HASHES, in the same order as
the emails in ADMIN_EMAILS.
"""

import argparse
import getpass
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.security import hash_password


def main() -> int:
    parser = argparse.ArgumentParser(description="Hash an admin password with bcrypt")
    parser.add_argument("--rounds", type=int, default=12, help="bcrypt cost factor (default: 12)")
    args = parser.parse_args()

    password = getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 1
    if password != getpass.getpass("Confirm password: "):
        print("Passwords do not match", file=sys.stderr)
        return 1

    print(hash_password(password, rounds=args.rounds))
    return 0


if __name__ == "__main__":
    sys.exit(main())
