"""
Create a user account from the command line. Run from project root:
  python -m podcast_api.scripts.create_user EMAIL PASSWORD [role]
Example:
  python -m podcast_api.scripts.create_user host@example.com your-password Host
"""
import argparse
import logging
import sys

from podcast_api.core.database import SessionLocal
from podcast_api.core.security import BCRYPT_MAX_BYTES, PASSWORD_MIN_LEN, check_password_length
from podcast_api.models.user import UserRole
from podcast_api.schemas.users import CreateUserInput
from podcast_api.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a podcast platform user.")
    parser.add_argument("email", help="Account email (1-255 chars)")
    parser.add_argument(
        "password", help=f"Password ({PASSWORD_MIN_LEN} char to {BCRYPT_MAX_BYTES} UTF-8 bytes)"
    )
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.LISTENER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    try:
        check_password_length(args.password)
    except ValueError as e:
        print(f"{e}.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        result = create_user(
            db,
            CreateUserInput(email=email, password=args.password, role=UserRole(args.role)),
        )
    finally:
        db.close()
    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1
    print(f"Created user '{email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
