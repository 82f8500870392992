"""
Create a user from the command line. Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [--role user|admin]
Example:
  python -m app.scripts.create_user alice alice@example.com your-secure-password

Without --role the usual policy applies: the first user becomes admin.
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.errors import Conflict
from app.core.logging import configure_logging
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.schemas.auth import RegisterRequest
from app.services import auth, users


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a bookshop user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--first-name", default="")
    parser.add_argument("--last-name", default="")
    parser.add_argument("--role", choices=["user", "admin"], default=None)
    args = parser.parse_args(argv)

    configure_logging(get_settings().LOG_LEVEL)
    username = args.username.strip()
    try:
        body = RegisterRequest(
            first_name=args.first_name or username,
            last_name=args.last_name or "-",
            username=username,
            email=args.email.strip(),
            password=args.password,
        )
    except ValueError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = auth.register(db, body)
        if args.role is not None and args.role != user.role:
            user = users.update_role(db, user.id, args.role)
        print(f"Created user '{user.username}' with role '{user.role}'.")
        return 0
    except Conflict as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
