"""Utility script to create the first administrator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from coretrack.application.use_cases.auth import create_account
from coretrack.domain.entities import ROLE_ADMIN
from coretrack.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create an administrator account for the CoreTrack API.",
    )
    parser.add_argument(
        "--name",
        default="Administrator",
        help="Full name of the administrator (default: Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Login email of the administrator (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the account. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    password = args.password or getpass("Password for the new administrator: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    with SessionLocal() as session:
        try:
            user = create_account(
                session,
                email=args.email,
                password=password,
                full_name=args.name,
                role_alias=ROLE_ADMIN,
                email_verified=True,
            )
        except ValueError as exc:
            session.rollback()
            raise SystemExit(f"Could not create the administrator: {exc}") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            raise SystemExit(f"Database error while saving the administrator: {exc}") from exc

    print(
        "Administrator created:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.full_name}\n"
        f"  Email: {user.email}"
    )


if __name__ == "__main__":
    main()
