"""
Create a user (e.g. the first admin). Run from project root:
  python -m acquisitions.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m acquisitions.scripts.create_user "Site Admin" admin@example.com your-secure-password admin
"""
import argparse
import sys

from acquisitions.core.database import SessionLocal
from acquisitions.core.errors import ServiceError
from acquisitions.schemas.auth import SignupRequest
from acquisitions.services.auth import create_user
from acquisitions.services.validation import Err, validate


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Acquisitions API user.")
    parser.add_argument("name", help="Display name (2-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    result = validate(
        SignupRequest,
        {"name": args.name, "email": args.email, "password": args.password, "role": args.role},
    )
    if isinstance(result, Err):
        for error in result.errors:
            print(f"{error.field}: {error.message}", file=sys.stderr)
        return 1
    body = result.data

    db = SessionLocal()
    try:
        user = create_user(db, name=body.name, email=body.email, password=body.password, role=body.role)
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
