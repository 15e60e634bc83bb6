# src/vidshare/scripts/create_admin.py
"""Create an administrator account, or promote an existing one."""
from __future__ import annotations

import argparse
import getpass
import sys

from vidshare.core.errors import ServiceError
from vidshare.db.session import SessionLocal, create_tables
from vidshare.models import Role, User
from vidshare.schemas.auth import RegisterRequest
from vidshare.services.accounts import create_user


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("email")
    parser.add_argument("--name", default="Administrator")
    parser.add_argument(
        "--password",
        default=None,
        help="Password for a new account (prompted when omitted)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (development databases only).",
    )
    args = parser.parse_args(argv)

    if args.create_tables:
        create_tables()

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == args.email.lower()).first()
        if user is not None:
            user.role = Role.ADMIN
            db.commit()
            print(f"[create_admin] promoted {user.email} to ADMIN")
            return

        password = args.password or getpass.getpass("Password: ")
        data = RegisterRequest(email=args.email, password=password, name=args.name)
        user = create_user(db, data, role=Role.ADMIN)
        print(f"[create_admin] created admin {user.email} (id={user.id})")
    except ServiceError as exc:
        print(f"[create_admin] ERROR: {exc.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
