"""
Create a user (e.g. the first admin). Run from project root:
  python -m taskboard.scripts.create_user EMAIL PASSWORD [ROLE]
Example:
  python -m taskboard.scripts.create_user admin@example.com your-secure-password ADMIN
"""
import argparse
import logging
import sys

from taskboard.core.config import get_settings
from taskboard.core.database import SessionLocal, init_db
from taskboard.core.errors import ApiError
from taskboard.core.logging import configure_logging
from taskboard.core.security import VALID_ROLES, hash_password
from taskboard.models import User
from taskboard.services.auth import validate_credentials

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Taskboard user without going through the API.")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="USER", choices=list(VALID_ROLES))
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (for SQLite or databases without migrations applied)",
    )
    args = parser.parse_args(argv)

    configure_logging(get_settings())
    email = args.email.strip()
    try:
        validate_credentials(email, args.password, args.role)
    except ApiError as e:
        print(e.message, file=sys.stderr)
        return 1

    if args.create_tables:
        init_db()

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            email=email,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        db.add(user)
        db.commit()
        logger.info("Created user id=%s role=%s", user.id, user.role)
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
